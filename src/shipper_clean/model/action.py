"""Remediation actions."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ActionType(str, Enum):
    """What to do with a release."""

    NOOP = "noop"
    REANNOTATE = "reannotate"
    DELETE = "delete"


class Action(BaseModel):
    """A decided remediation for one release."""

    type: ActionType
    clusters: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @classmethod
    def noop(cls) -> "Action":
        return cls(type=ActionType.NOOP)

    @classmethod
    def reannotate(cls, clusters: List[str]) -> "Action":
        return cls(type=ActionType.REANNOTATE, clusters=sorted(clusters))

    @classmethod
    def delete(cls) -> "Action":
        return cls(type=ActionType.DELETE)

    @property
    def annotation(self) -> str:
        """Annotation value a reannotate writes."""
        return ",".join(self.clusters)

    @property
    def is_write(self) -> bool:
        return self.type != ActionType.NOOP
