from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_br, format_iso, inclusive_days, parse_date
from ..core.enums import CycleStatus, RejectionReason
from ..core.exceptions import StoreError, ValidationError
from ..employees.model import Employee


def new_leave_id() -> str:
    return uuid.uuid4().hex[:12]


def make_cycle_id(employee_id: str, start_year: int) -> str:
    return f"{employee_id}-{int(start_year)}"


def employee_id_from_cycle_id(cycle_id: str) -> str:
    """Split ``"<employee id>-<year>"``; employee ids may themselves contain dashes."""
    employee_id, sep, year = str(cycle_id).rpartition("-")
    if not sep or not employee_id or not year.isdigit():
        raise ValidationError(f"Invalid cycle id: {cycle_id!r}")
    return employee_id


@dataclass(frozen=True)
class LeavePeriod:
    """A persisted leave period; ``start`` and ``end`` are both inclusive."""

    leave_id: str
    start: date
    end: date
    days: int

    @classmethod
    def create(cls, start: date, end: date, *, leave_id: Optional[str] = None) -> "LeavePeriod":
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return cls(leave_id=leave_id or new_leave_id(), start=start, end=end, days=inclusive_days(start, end))

    def to_record(self) -> dict:
        return {
            "id": self.leave_id,
            "start": format_iso(self.start),
            "end": format_iso(self.end),
            "days": int(self.days),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LeavePeriod":
        try:
            return cls(
                leave_id=str(record["id"]),
                start=parse_date(record["start"], "leave start"),
                end=parse_date(record["end"], "leave end"),
                days=int(record["days"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Malformed leave record: {record!r}") from exc


@dataclass(frozen=True)
class CycleWindow:
    """One 12-month acquisition cycle, before classification."""

    cycle_id: str
    employee_id: str
    acquisition_start: date
    acquisition_end: date
    concessive_deadline: date


@dataclass(frozen=True)
class CycleClassification:
    status: CycleStatus
    remaining_days: int
    is_overdue_double: bool = False


@dataclass(frozen=True)
class VacationCycle:
    """Read-model for one cycle; rebuilt on every read, never stored."""

    window: CycleWindow
    employee: Employee
    leaves: tuple[LeavePeriod, ...]
    classification: CycleClassification

    @property
    def cycle_id(self) -> str:
        return self.window.cycle_id

    @property
    def status(self) -> CycleStatus:
        return self.classification.status

    @property
    def remaining_days(self) -> int:
        return self.classification.remaining_days

    @property
    def is_overdue_double(self) -> bool:
        return self.classification.is_overdue_double

    def to_dict(self) -> dict:
        return {
            "cycle_id": self.cycle_id,
            "employee_id": self.employee.employee_id,
            "employee_name": self.employee.name,
            "role": self.employee.role,
            "acquisition_start": format_br(self.window.acquisition_start),
            "acquisition_end": format_br(self.window.acquisition_end),
            "concessive_deadline": format_br(self.window.concessive_deadline),
            "status": self.status.value,
            "remaining_days": self.remaining_days,
            "is_overdue_double": self.is_overdue_double,
            "leaves": [
                {
                    "id": leave.leave_id,
                    "start": format_br(leave.start),
                    "end": format_br(leave.end),
                    "days": leave.days,
                }
                for leave in self.leaves
            ],
        }


@dataclass(frozen=True)
class LeaveProposal:
    days: int
    overlaps: bool
    exceeds_balance: bool

    @property
    def reasons(self) -> tuple[RejectionReason, ...]:
        out = []
        if self.overlaps:
            out.append(RejectionReason.OVERLAP)
        if self.exceeds_balance:
            out.append(RejectionReason.BALANCE_EXCEEDED)
        return tuple(out)

    @property
    def is_valid(self) -> bool:
        return not self.reasons


@dataclass(frozen=True)
class SkippedEmployee:
    employee_id: str
    reason: str


@dataclass(frozen=True)
class CycleListing:
    cycles: list[VacationCycle] = field(default_factory=list)
    skipped: list[SkippedEmployee] = field(default_factory=list)


@dataclass(frozen=True)
class VacationSummary:
    total: int
    overdue: int
    with_balance: int
    in_progress: int
    scheduled: int
