"""Base exporter class."""

from abc import ABC, abstractmethod
from typing import List, Dict, Any

from ..model.shipper import OutputRelease


class Exporter(ABC):
    """Base class for counted-release exporters."""

    @abstractmethod
    def render(self, releases: List[OutputRelease]) -> str:
        """Render releases as text."""
        pass

    def clean_release(self, release: OutputRelease) -> Dict[str, Any]:
        """Plain dict with namespace first, then name."""
        return {"namespace": release.namespace, "name": release.name}
