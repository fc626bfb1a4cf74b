"""Data models for shipper-clean."""

from .shipper import Application, Release, OutputRelease
from .action import Action, ActionType
from .config import OutputFormat, RunConfig
from .result import Decision, ItemError, RunResult

__all__ = [
    "Application",
    "Release",
    "OutputRelease",
    "Action",
    "ActionType",
    "OutputFormat",
    "RunConfig",
    "Decision",
    "ItemError",
    "RunResult",
]
