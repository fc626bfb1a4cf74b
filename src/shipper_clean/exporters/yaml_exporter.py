"""YAML exporter."""

import yaml
from typing import List

from ..model.shipper import OutputRelease
from .base import Exporter


class YamlExporter(Exporter):
    """Render counted releases as a YAML list."""

    def render(self, releases: List[OutputRelease]) -> str:
        cleaned = [self.clean_release(r) for r in releases]
        return yaml.safe_dump(cleaned, default_flow_style=False, sort_keys=False)
