from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import inclusive_days, ranges_overlap
from ..common.validators import require_date_order, require_non_empty
from ..core.enums import LeaveMode
from ..core.exceptions import LeaveRejectedError, NotFoundError, ValidationError
from .classifier import remaining_days
from .model import LeavePeriod, LeaveProposal, employee_id_from_cycle_id
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def _sorted(leaves: Sequence[LeavePeriod]) -> list[LeavePeriod]:
    return sorted(leaves, key=lambda leave: (leave.start, leave.end, leave.leave_id))


def evaluate_leave(
    employee_leaves: Mapping[str, Sequence[LeavePeriod]],
    *,
    cycle_id: str,
    start: date,
    end: date,
    excluding_leave_id: Optional[str] = None,
) -> LeaveProposal:
    """Check a leave against every leave of the same employee.

    ``employee_leaves`` maps each of the employee's cycle ids to its leaves.
    Overlap is employee-wide; the balance check only looks at ``cycle_id``,
    crediting back the leave being replaced when ``excluding_leave_id`` is set.
    """
    require_date_order(start, end)
    days = inclusive_days(start, end)

    overlaps = any(
        ranges_overlap(start, end, other.start, other.end)
        for leaves in employee_leaves.values()
        for other in leaves
        if other.leave_id != excluding_leave_id
    )

    cycle_leaves = list(employee_leaves.get(cycle_id, []))
    available = remaining_days(cycle_leaves)
    if excluding_leave_id:
        replaced = next((item for item in cycle_leaves if item.leave_id == excluding_leave_id), None)
        if replaced:
            available += replaced.days

    return LeaveProposal(days=days, overlaps=overlaps, exceeds_balance=days > available)


class LeaveScheduler:
    """Validates and applies leave changes for one cycle at a time.

    Every write replaces the cycle's whole list through the store, and every
    commit is re-validated against the store's current contents.
    """

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def _employee_leaves(self, employee_id: str, cycle_id: str) -> dict[str, list[LeavePeriod]]:
        by_cycle = dict(self._schedules.list_for_employee(employee_id))
        by_cycle.setdefault(cycle_id, [])
        return by_cycle

    def propose_leave(
        self,
        *,
        employee_id: str,
        cycle_id: str,
        start: date,
        end: date,
        excluding_leave_id: Optional[str] = None,
    ) -> LeaveProposal:
        employee_id = require_non_empty(employee_id, "Employee id")
        if employee_id_from_cycle_id(cycle_id) != employee_id:
            raise ValidationError(f"Cycle {cycle_id} does not belong to employee {employee_id}")

        return evaluate_leave(
            self._employee_leaves(employee_id, cycle_id),
            cycle_id=cycle_id,
            start=start,
            end=end,
            excluding_leave_id=excluding_leave_id,
        )

    def commit_leave(self, *, cycle_id: str, leave: LeavePeriod, mode: LeaveMode) -> LeavePeriod:
        """Persist ``leave`` into ``cycle_id``.

        Raises LeaveRejectedError (nothing written) on overlap or overdraw,
        NotFoundError when updating a leave the cycle does not hold.
        """
        employee_id = employee_id_from_cycle_id(cycle_id)
        leave = LeavePeriod.create(leave.start, leave.end, leave_id=leave.leave_id or None)

        by_cycle = self._employee_leaves(employee_id, cycle_id)
        current = by_cycle[cycle_id]
        known_ids = {item.leave_id for leaves in by_cycle.values() for item in leaves}

        if mode == LeaveMode.UPDATE:
            if leave.leave_id not in {item.leave_id for item in current}:
                raise NotFoundError(f"Leave {leave.leave_id} not found in cycle {cycle_id}")
            excluding = leave.leave_id
        else:
            if leave.leave_id in known_ids:
                raise ValidationError(f"Leave {leave.leave_id} already exists")
            excluding = None

        proposal = evaluate_leave(
            by_cycle,
            cycle_id=cycle_id,
            start=leave.start,
            end=leave.end,
            excluding_leave_id=excluding,
        )
        if not proposal.is_valid:
            logger.info(
                "Rejected %s of leave %s in cycle %s: %s",
                mode.value,
                leave.leave_id,
                cycle_id,
                ", ".join(r.value for r in proposal.reasons),
            )
            raise LeaveRejectedError(proposal.reasons)

        if mode == LeaveMode.UPDATE:
            updated = [leave if item.leave_id == leave.leave_id else item for item in current]
        else:
            updated = current + [leave]

        self._schedules.put(cycle_id, _sorted(updated))
        return leave

    def remove_leave(self, *, cycle_id: str, leave_id: str) -> LeavePeriod:
        current = self._schedules.get(cycle_id)
        removed = next((item for item in current if item.leave_id == leave_id), None)
        if removed is None:
            raise NotFoundError(f"Leave {leave_id} not found in cycle {cycle_id}")

        remaining = [item for item in current if item.leave_id != leave_id]
        if remaining:
            self._schedules.put(cycle_id, _sorted(remaining))
        else:
            self._schedules.delete(cycle_id)
        return removed

    def clear_cycle(self, *, cycle_id: str) -> None:
        employee_id_from_cycle_id(cycle_id)
        self._schedules.delete(cycle_id)
