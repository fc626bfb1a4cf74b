"""Live cluster filtering."""

from typing import AbstractSet, Iterable, List


def filter_live(selected: Iterable[str], decommissioned: AbstractSet[str]) -> List[str]:
    """Return the selected clusters that are not decommissioned, sorted.

    A release scheduled nowhere and one scheduled only on decommissioned
    clusters both come back empty.
    """
    return sorted({cluster for cluster in selected if cluster not in decommissioned})
