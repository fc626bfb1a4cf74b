"""Structured output for counted releases."""

from ..model.config import OutputFormat
from .base import Exporter
from .yaml_exporter import YamlExporter
from .json_exporter import JsonExporter

EXPORTERS = {
    OutputFormat.JSON: JsonExporter,
    OutputFormat.YAML: YamlExporter,
}


def get_exporter(output_format: OutputFormat) -> Exporter:
    """Return the exporter for ``output_format``."""
    return EXPORTERS[OutputFormat(output_format)]()


__all__ = ["Exporter", "YamlExporter", "JsonExporter", "get_exporter"]
