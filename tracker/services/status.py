"""Derived project status.

Everything here is pure: callers pass the stored values plus ``now`` and get
the derived values back. Reads apply it to the response only, saves apply it
to the incoming payload before it is written.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

from tracker.config import settings
from tracker.models.project import ProjectStatus
from tracker.utils.dates import start_of_day, utcnow

T = TypeVar("T")

COMPLETE = ProjectStatus.COMPLETE.value
BEHIND = ProjectStatus.BEHIND.value
ON_PAUSE = ProjectStatus.ON_PAUSE.value

STATUS_ORDER = ["behind", "on-pause", "active", "discovery", "on-track", "complete"]


class DerivedStatus(NamedTuple):
    status: str
    completed_date: Optional[datetime]


def is_past_due(end_date: date, now: datetime) -> bool:
    return now > start_of_day(end_date)


def derive_status(
    status: str,
    progress: int,
    end_date: date,
    completed_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> DerivedStatus:
    """Recompute status and completion timestamp from progress and dates.

    * progress at or above 100 completes the project, stamping
      ``completed_date`` only if it is not already set;
    * progress below 100 on a complete project clears ``completed_date``;
    * a past-due project becomes ``behind`` unless it is paused or complete.
    """
    now = now or utcnow()
    status = status.value if isinstance(status, ProjectStatus) else status

    if progress >= 100:
        if status != COMPLETE or completed_date is None:
            return DerivedStatus(COMPLETE, completed_date or now)
    elif status == COMPLETE:
        return DerivedStatus(status, None)
    elif is_past_due(end_date, now) and status not in (ON_PAUSE, COMPLETE):
        return DerivedStatus(BEHIND, completed_date)
    return DerivedStatus(status, completed_date)


def is_finished(status: str, completed_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if status != COMPLETE or completed_date is None:
        return False
    now = now or utcnow()
    return now - completed_date >= timedelta(days=settings.FINISHED_AFTER_DAYS)


def partition(items: Iterable[T], finished: Callable[[T], bool]) -> Tuple[List[T], List[T]]:
    """Split ``items`` into (overview, finished) lists, preserving order."""
    overview: List[T] = []
    archived: List[T] = []
    for item in items:
        (archived if finished(item) else overview).append(item)
    return overview, archived


def _status_rank(status: str) -> int:
    try:
        return STATUS_ORDER.index(status)
    except ValueError:
        return len(STATUS_ORDER)


SORT_KEYS = {
    "status": (lambda p: _status_rank(p.status), False),
    "name": (lambda p: p.name.lower(), False),
    "name-desc": (lambda p: p.name.lower(), True),
    "progress": (lambda p: p.progress, True),
    "progress-asc": (lambda p: p.progress, False),
    "end-date": (lambda p: p.end_date, False),
    "end-date-desc": (lambda p: p.end_date, True),
    "updated": (lambda p: p.updated_at or p.created_at, True),
    "priority": (lambda p: p.priority or 3, False),
    "priority-desc": (lambda p: p.priority or 3, True),
}


def sort_projects(projects: Sequence[T], sort_by: str = "status") -> List[T]:
    """Order projects the way the list views do; unknown keys fall back to status order."""
    key, reverse = SORT_KEYS.get(sort_by, SORT_KEYS["status"])
    return sorted(projects, key=key, reverse=reverse)
