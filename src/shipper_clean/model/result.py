"""Outcome of a single run."""

from typing import List

from pydantic import BaseModel, Field

from ..errors import CleanupFailedError
from .action import Action
from .shipper import OutputRelease


class ItemError(BaseModel):
    """A failure recorded against one release, application or namespace."""

    item: str
    message: str


class Decision(BaseModel):
    """The action decided for one release."""

    namespace: str
    name: str
    action: Action


class RunResult(BaseModel):
    """Everything a run decided, counted and failed on.

    Errors are collected rather than raised so every item gets attempted;
    ``raise_for_errors`` folds them into one failure at the end.
    """

    processed: int = 0
    decisions: List[Decision] = Field(default_factory=list)
    counted: List[OutputRelease] = Field(default_factory=list)
    errors: List[ItemError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def count(self) -> int:
        return len(self.counted)

    def record_error(self, item: str, error: Exception) -> None:
        self.errors.append(ItemError(item=item, message=str(error)))

    def error_messages(self) -> List[str]:
        return [f"{error.item}: {error.message}" for error in self.errors]

    def raise_for_errors(self) -> None:
        """Raise CleanupFailedError listing every recorded failure."""
        if self.errors:
            raise CleanupFailedError(self.error_messages())
