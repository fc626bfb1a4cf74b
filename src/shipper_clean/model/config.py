"""Run configuration."""

from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ..errors import ConfigurationError


class OutputFormat(str, Enum):
    """Structured output formats for the count commands."""

    JSON = "json"
    YAML = "yaml"


class RunConfig(BaseModel):
    """Inputs fixed for the whole run and passed into every core call."""

    decommissioned_clusters: FrozenSet[str]
    dry_run: bool = False
    output_format: Optional[OutputFormat] = None
    kubeconfig: Optional[Path] = None
    context: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("decommissioned_clusters", mode="before")
    @classmethod
    def _split_clusters(cls, value):
        if isinstance(value, str):
            value = [value]
        clusters = set()
        for entry in value or []:
            clusters.update(part.strip() for part in str(entry).split(",") if part.strip())
        if not clusters:
            raise ValueError("at least one decommissioned cluster is required")
        return frozenset(clusters)

    @classmethod
    def build(
        cls,
        decommissioned_clusters: Iterable[str],
        dry_run: bool = False,
        output_format: Optional[str] = None,
        kubeconfig: Optional[Path] = None,
        context: Optional[str] = None,
    ) -> "RunConfig":
        """Validate raw inputs, raising ConfigurationError on bad values."""
        try:
            return cls(
                decommissioned_clusters=list(decommissioned_clusters or []),
                dry_run=dry_run,
                output_format=output_format or None,
                kubeconfig=kubeconfig,
                context=context or None,
            )
        except ValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            raise ConfigurationError(messages) from e

