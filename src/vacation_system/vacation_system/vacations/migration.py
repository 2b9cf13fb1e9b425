"""One-time upgrade of legacy single-leave schedules.

The previous front end stored at most one leave per cycle as a bare
``{"start": ..., "end": ...}`` object meaning a full 30-day vacation. The
current format is a list of ``{"id", "start", "end", "days"}`` records.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..common.datetime_utils import parse_date
from ..core.constants import LEGACY_LEAVE_DAYS
from ..core.exceptions import MalformedDateError
from .model import LeavePeriod, new_leave_id
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def is_legacy_payload(payload: Any) -> bool:
    return isinstance(payload, Mapping) and "start" in payload and "end" in payload


def upgrade_legacy_payload(payload: Mapping[str, Any]) -> list[dict]:
    leave = LeavePeriod(
        leave_id=new_leave_id(),
        start=parse_date(payload["start"], "legacy leave start"),
        end=parse_date(payload["end"], "legacy leave end"),
        days=LEGACY_LEAVE_DAYS,
    )
    return [leave.to_record()]


@dataclass(frozen=True)
class MigrationResult:
    upgraded: int = 0
    skipped: list[str] = field(default_factory=list)


def migrate_legacy_schedules(schedules: ScheduleRepository) -> MigrationResult:
    """Rewrite every legacy payload in list format.

    Safe to run repeatedly: rows already in list format are left alone. A
    legacy row with unreadable dates is left untouched, logged and reported
    in ``MigrationResult.skipped`` so the remaining rows still get upgraded.
    """
    upgraded = 0
    skipped: list[str] = []
    for cycle_id, payload in list(schedules.iter_raw()):
        if not is_legacy_payload(payload):
            continue
        try:
            records = upgrade_legacy_payload(payload)
        except MalformedDateError as exc:
            logger.warning("Legacy vacation schedule %s left as is: %s", cycle_id, exc)
            skipped.append(cycle_id)
            continue
        schedules.put_raw(cycle_id, records)
        upgraded += 1

    if upgraded:
        logger.info("Upgraded %d legacy vacation schedule(s)", upgraded)
    return MigrationResult(upgraded=upgraded, skipped=skipped)
