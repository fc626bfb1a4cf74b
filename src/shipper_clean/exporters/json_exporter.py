"""JSON exporter."""

import json
from typing import List

from ..model.shipper import OutputRelease
from .base import Exporter


class JsonExporter(Exporter):
    """Render counted releases as a JSON list."""

    def render(self, releases: List[OutputRelease]) -> str:
        return json.dumps([self.clean_release(r) for r in releases], indent=4)
