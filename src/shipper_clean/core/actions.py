"""Deciding what to do with a release."""

from typing import List

from ..model.action import Action
from ..model.config import RunConfig
from ..model.shipper import Release
from .clusters import filter_live
from .contender import ContenderResolver


def resolve_action(release: Release, live: List[str], is_contender: bool) -> Action:
    """Map a release's live clusters and contender status to an action.

    ``live`` must already be filtered and sorted. ``is_contender`` is only
    looked at when ``live`` is empty.
    """
    if live:
        if ",".join(live) == release.recorded_clusters:
            return Action.noop()
        return Action.reannotate(live)

    # Contenders stay even when every cluster they run on is gone
    if is_contender:
        return Action.noop()
    return Action.delete()


class ReleaseClassifier:
    """Computes the action for a release under a run configuration."""

    def __init__(self, resolver: ContenderResolver, config: RunConfig):
        self.resolver = resolver
        self.config = config

    def live_clusters(self, release: Release) -> List[str]:
        return filter_live(release.selected_clusters, self.config.decommissioned_clusters)

    def classify(self, release: Release) -> Action:
        """Decide the action for ``release``.

        The contender lookup only happens for releases with no live clusters
        left, and its errors propagate to the caller.
        """
        live = self.live_clusters(release)
        is_contender = False
        if not live:
            is_contender = self.resolver.is_contender(release)
        return resolve_action(release, live, is_contender)
