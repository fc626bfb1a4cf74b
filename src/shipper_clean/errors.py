"""Exceptions raised by shipper-clean."""

from typing import List


class ShipperCleanError(Exception):
    """Base class for all shipper-clean errors."""


class ConfigurationError(ShipperCleanError):
    """Invalid run configuration. Raised before anything is enumerated."""


class StoreError(ShipperCleanError):
    """A call to the management cluster failed."""


class NotFoundError(StoreError):
    """The requested object does not exist."""


class InvalidReleaseError(ShipperCleanError):
    """A release is missing data needed to classify it."""


class ContenderNotFoundError(ShipperCleanError):
    """No release of an application qualifies as its contender."""

    def __init__(self, app_name: str):
        super().__init__(f"no contender found for application {app_name!r}")
        self.app_name = app_name


class CleanupFailedError(ShipperCleanError):
    """One or more items failed during a run."""

    def __init__(self, messages: List[str]):
        super().__init__(",".join(messages))
        self.messages = messages
