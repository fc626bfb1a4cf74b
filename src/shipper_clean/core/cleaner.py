"""Applying remediation actions to releases."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..errors import ShipperCleanError
from ..k8s.store import ShipperStore
from ..model.action import Action, ActionType
from ..model.config import RunConfig
from ..model.result import Decision, RunResult
from ..model.shipper import Release
from ..utils.logger import get_logger
from .actions import ReleaseClassifier
from .contender import ContenderResolver

logger = get_logger(__name__)


class ReleaseCleaner:
    """Walks every release on the management cluster and remediates it.

    Releases partly on decommissioned clusters get their cluster annotation
    rewritten; releases with no live cluster left are deleted unless they are
    their application's contender. In dry-run mode nothing is written but the
    progress output is the same.
    """

    def __init__(
        self,
        store: ShipperStore,
        config: RunConfig,
        resolver: Optional[ContenderResolver] = None,
        console: Optional[Console] = None,
    ):
        self.store = store
        self.config = config
        self.classifier = ReleaseClassifier(resolver or ContenderResolver(store), config)
        self.console = console or Console()

    def run(self) -> RunResult:
        """Process all namespaces. Per-item failures end up in the result."""
        result = RunResult()
        namespaces = self.store.list_namespaces()
        logger.info(f"Cleaning releases in {len(namespaces)} namespaces")

        for namespace in namespaces:
            try:
                releases = self.store.list_releases(namespace)
            except ShipperCleanError as e:
                logger.error(f"Failed to list releases in {namespace}: {e}")
                result.record_error(namespace, e)
                continue

            for release in releases:
                self.process(release, result)

        logger.info(
            f"Processed {result.processed} releases with {len(result.errors)} errors"
        )
        return result

    def process(self, release: Release, result: RunResult) -> None:
        result.processed += 1
        try:
            action = self.classifier.classify(release)
        except ShipperCleanError as e:
            logger.error(f"Failed to classify release {release.key}: {e}")
            result.record_error(release.key, e)
            return

        result.decisions.append(
            Decision(namespace=release.namespace, name=release.name, action=action)
        )

        if action.type == ActionType.REANNOTATE:
            self._reannotate(release, action, result)
        elif action.type == ActionType.DELETE:
            self._delete(release, result)

    def _reannotate(self, release: Release, action: Action, result: RunResult) -> None:
        logger.info(
            f"Reannotating {release.key}: {release.recorded_clusters!r} -> {action.annotation!r}"
        )
        self.console.print(
            f"Editing annotations of release {escape(release.key)} "
            f"to {escape(action.annotation)}...",
            end="",
            soft_wrap=True,
        )
        if self.config.dry_run:
            self.console.print("dryrun")
            return

        try:
            self.store.update_release(release.with_clusters(action.annotation))
        except ShipperCleanError as e:
            self.console.print("[red]failed[/red]")
            result.record_error(release.key, e)
            return
        self.console.print("done")

    def _delete(self, release: Release, result: RunResult) -> None:
        logger.info(f"Deleting {release.key}")
        self.console.print(f"Deleting release {escape(release.key)}...", end="", soft_wrap=True)
        if self.config.dry_run:
            self.console.print("dryrun")
            return

        try:
            self.store.delete_release(release.namespace, release.name)
        except ShipperCleanError as e:
            self.console.print("[red]failed[/red]")
            result.record_error(release.key, e)
            return
        self.console.print("done")
