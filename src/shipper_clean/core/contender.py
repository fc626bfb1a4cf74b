"""Contender resolution for Shipper applications."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..errors import ContenderNotFoundError
from ..k8s.store import ShipperStore
from ..model.shipper import APP_LABEL, Application, Release
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ContenderSelector(ABC):
    """Picks an application's contender from its releases."""

    @abstractmethod
    def select(self, app_name: str, releases: List[Release]) -> Release:
        """Pick the contender from releases ordered newest first.

        Raises ContenderNotFoundError when none qualifies.
        """


class LatestGenerationSelector(ContenderSelector):
    """Shipper's rule: the contender is the highest generation release."""

    def select(self, app_name: str, releases: List[Release]) -> Release:
        if not releases:
            raise ContenderNotFoundError(app_name)
        return releases[0]


def sort_by_generation_descending(releases: List[Release]) -> List[Release]:
    return sorted(releases, key=lambda release: release.generation, reverse=True)


class ContenderResolver:
    """Finds the contender of an application, or of a release's application."""

    def __init__(self, store: ShipperStore, selector: Optional[ContenderSelector] = None):
        self.store = store
        self.selector = selector or LatestGenerationSelector()

    def resolve(self, application: Application) -> Release:
        """Return the contender of ``application``."""
        releases = self.store.list_releases(
            application.namespace, selector=f"{APP_LABEL}={application.name}"
        )
        ordered = sort_by_generation_descending(releases)
        contender = self.selector.select(application.name, ordered)
        logger.debug(f"Contender of {application.key} is {contender.name}")
        return contender

    def is_contender(self, release: Release) -> bool:
        """Check whether ``release`` is its application's contender.

        This always goes through the application's full release list since
        contender status depends on the siblings, not the release alone.
        """
        application = self.store.get_application(release.namespace, release.app_name)
        contender = self.resolve(application)
        return (contender.namespace, contender.name) == (release.namespace, release.name)
