"""Read-only audit of releases stranded on decommissioned clusters."""

from typing import Optional

from ..errors import ShipperCleanError
from ..k8s.store import ShipperStore
from ..model.config import RunConfig
from ..model.result import RunResult
from ..model.shipper import OutputRelease, Release
from ..utils.logger import get_logger
from .clusters import filter_live
from .contender import ContenderResolver

logger = get_logger(__name__)


class DecommissionCounter:
    """Counts releases or contenders with no live cluster left. Never writes."""

    def __init__(
        self,
        store: ShipperStore,
        config: RunConfig,
        resolver: Optional[ContenderResolver] = None,
    ):
        self.store = store
        self.config = config
        self.resolver = resolver or ContenderResolver(store)

    def _tally(self, release: Release, result: RunResult) -> None:
        result.processed += 1
        # Releases scheduled nowhere count too, same as in clean mode
        if not filter_live(release.selected_clusters, self.config.decommissioned_clusters):
            result.counted.append(OutputRelease.of(release))

    def count_releases(self) -> RunResult:
        """Count every release scheduled only on decommissioned clusters."""
        result = RunResult()
        for namespace in self.store.list_namespaces():
            try:
                releases = self.store.list_releases(namespace)
            except ShipperCleanError as e:
                logger.error(f"Failed to list releases in {namespace}: {e}")
                result.record_error(namespace, e)
                continue

            for release in releases:
                self._tally(release, result)

        logger.info(f"Counted {result.count} of {result.processed} releases")
        return result

    def count_contenders(self) -> RunResult:
        """Count application contenders scheduled only on decommissioned clusters."""
        result = RunResult()
        for namespace in self.store.list_namespaces():
            try:
                applications = self.store.list_applications(namespace)
            except ShipperCleanError as e:
                logger.error(f"Failed to list applications in {namespace}: {e}")
                result.record_error(namespace, e)
                continue

            for application in applications:
                try:
                    contender = self.resolver.resolve(application)
                except ShipperCleanError as e:
                    logger.error(f"Failed to resolve contender of {application.key}: {e}")
                    result.record_error(application.key, e)
                    continue
                self._tally(contender, result)

        logger.info(f"Counted {result.count} of {result.processed} contenders")
        return result
