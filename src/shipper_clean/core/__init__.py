"""Core business logic."""

from .clusters import filter_live
from .contender import ContenderResolver, ContenderSelector, LatestGenerationSelector
from .actions import ReleaseClassifier, resolve_action
from .cleaner import ReleaseCleaner
from .counter import DecommissionCounter

__all__ = [
    "filter_live",
    "ContenderResolver",
    "ContenderSelector",
    "LatestGenerationSelector",
    "ReleaseClassifier",
    "resolve_action",
    "ReleaseCleaner",
    "DecommissionCounter",
]
