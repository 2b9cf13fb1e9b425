from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.constants import ENTITLEMENT_DAYS
from ..core.enums import CycleStatus
from .model import CycleClassification, CycleWindow, LeavePeriod


def remaining_days(leaves: Iterable[LeavePeriod]) -> int:
    return ENTITLEMENT_DAYS - sum(int(leave.days) for leave in leaves)


def classify(window: CycleWindow, leaves: Iterable[LeavePeriod], today: date) -> CycleClassification:
    """Derive a cycle's status from its leaves and the current date.

    Rules are checked in order and the first match wins:
    a leave covering today, a leave starting after today, every leave over
    with nothing left, concessive deadline passed with balance left, and
    finally plain ACQUIRED.
    """
    leaves = list(leaves)
    remaining = remaining_days(leaves)

    in_progress = any(leave.start <= today <= leave.end for leave in leaves)
    has_future = any(today < leave.start for leave in leaves)
    all_past = bool(leaves) and all(today > leave.end for leave in leaves)

    if in_progress:
        return CycleClassification(status=CycleStatus.IN_PROGRESS, remaining_days=remaining)
    if has_future:
        return CycleClassification(status=CycleStatus.SCHEDULED, remaining_days=remaining)
    if all_past and remaining <= 0:
        return CycleClassification(status=CycleStatus.COMPLETED, remaining_days=remaining)
    if today > window.concessive_deadline and remaining > 0:
        return CycleClassification(status=CycleStatus.OVERDUE, remaining_days=remaining, is_overdue_double=True)
    return CycleClassification(status=CycleStatus.ACQUIRED, remaining_days=remaining)
