"""Ordering of admitted breakout candidates."""

from typing import Iterable, List

from .classifier import BreakoutStatus, ClassificationResult

STATUS_PRIORITY = {
    BreakoutStatus.IMMINENT: 5,
    BreakoutStatus.READY: 4,
    BreakoutStatus.FRESH_BREAKOUT: 3,
    BreakoutStatus.RECENT_BREAKOUT: 2,
    BreakoutStatus.APPROACHING: 1,
    BreakoutStatus.BUILDING: 0,
    BreakoutStatus.IN_CLOUD: 0,
}


def status_priority(status: BreakoutStatus) -> int:
    """Rank of a status; statuses that are never admitted rank last (-1)."""
    return STATUS_PRIORITY.get(status, -1)


def rank_results(results: Iterable[ClassificationResult]) -> List[ClassificationResult]:
    """Sort by status priority, then breakout potential (both descending).

    The sort is stable: equal keys keep their input order.
    """
    return sorted(
        results,
        key=lambda r: (-status_priority(r.status), -r.breakout_potential),
    )
