from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import DateLike, parse_date, today_local
from ..common.validators import require_non_empty, require_positive
from ..core.constants import DEFAULT_FLOOR_DATE, DEFAULT_MAX_CYCLE_ITERATIONS
from ..core.enums import CycleSortKey, CycleStatus, LeaveMode
from ..core.exceptions import NotFoundError, StoreError, StoreUnavailableError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .classifier import classify
from .generator import generate_cycles, is_vacation_eligible
from .model import (
    CycleListing,
    LeavePeriod,
    LeaveProposal,
    SkippedEmployee,
    VacationCycle,
    VacationSummary,
    employee_id_from_cycle_id,
)
from .repository import ScheduleRepository
from .scheduler import LeaveScheduler

logger = logging.getLogger(__name__)

_SORT_KEYS = {
    CycleSortKey.NAME: lambda c: c.employee.name.casefold(),
    CycleSortKey.BALANCE: lambda c: c.remaining_days,
    CycleSortKey.PERIOD: lambda c: c.window.acquisition_start,
    CycleSortKey.STATUS: lambda c: c.status.value,
}


class VacationService:
    def __init__(
        self,
        employees: EmployeeRepository,
        schedules: ScheduleRepository,
        *,
        scheduler: Optional[LeaveScheduler] = None,
        floor_date: date = DEFAULT_FLOOR_DATE,
        max_iterations: int = DEFAULT_MAX_CYCLE_ITERATIONS,
    ):
        self._employees = employees
        self._schedules = schedules
        self._scheduler = scheduler or LeaveScheduler(schedules)
        self._floor_date = floor_date
        self._max_iterations = require_positive(max_iterations, "Max cycle iterations")

    # -------- Read path --------
    def build_cycles(self, employee: Employee, today: date) -> list[VacationCycle]:
        """Every generated cycle of one employee, COMPLETED ones included."""
        windows = list(
            generate_cycles(
                employee,
                today,
                floor_date=self._floor_date,
                max_iterations=self._max_iterations,
            )
        )
        if not windows:
            return []

        stored = self._schedules.list_for_employee(employee.employee_id)
        out: list[VacationCycle] = []
        for w in windows:
            leaves = tuple(stored.get(w.cycle_id, []))
            out.append(
                VacationCycle(
                    window=w,
                    employee=employee,
                    leaves=leaves,
                    classification=classify(w, leaves, today),
                )
            )
        return out

    def list_cycles(
        self,
        today: Optional[date] = None,
        *,
        status: Optional[CycleStatus] = None,
        search: Optional[str] = None,
        sort_by: CycleSortKey = CycleSortKey.NAME,
        descending: bool = False,
    ) -> CycleListing:
        """Open cycles of all eligible employees.

        COMPLETED cycles are never listed. An employee whose registry record
        (admission date, status, category) or stored leaves cannot be read is
        skipped and reported in ``CycleListing.skipped``; the rest of the
        listing is unaffected.

        ``status=ACQUIRED`` selects every cycle with balance left, whatever
        its lifecycle state.
        """
        today = today or today_local()
        cycles: list[VacationCycle] = []
        skipped: list[SkippedEmployee] = []

        for emp in self._employees.list_all():
            try:
                if not is_vacation_eligible(emp):
                    continue
                built = self.build_cycles(emp, today)
            except StoreUnavailableError:
                raise
            except (ValidationError, StoreError) as exc:
                logger.warning("Skipping vacation cycles for employee %s: %s", emp.employee_id, exc)
                skipped.append(SkippedEmployee(employee_id=emp.employee_id, reason=str(exc)))
                continue
            cycles.extend(c for c in built if c.status != CycleStatus.COMPLETED)

        if status == CycleStatus.ACQUIRED:
            cycles = [c for c in cycles if c.remaining_days > 0]
        elif status is not None:
            cycles = [c for c in cycles if c.status == status]

        term = (search or "").strip().casefold()
        if term:
            cycles = [
                c for c in cycles
                if term in c.employee.name.casefold() or term in c.employee.employee_id.casefold()
            ]

        cycles.sort(key=_SORT_KEYS[CycleSortKey(sort_by)], reverse=bool(descending))
        return CycleListing(cycles=cycles, skipped=skipped)

    def summary(self, today: Optional[date] = None) -> VacationSummary:
        cycles = self.list_cycles(today).cycles
        return VacationSummary(
            total=len(cycles),
            overdue=sum(1 for c in cycles if c.status == CycleStatus.OVERDUE),
            with_balance=sum(1 for c in cycles if c.remaining_days > 0),
            in_progress=sum(1 for c in cycles if c.status == CycleStatus.IN_PROGRESS),
            scheduled=sum(1 for c in cycles if c.status == CycleStatus.SCHEDULED),
        )

    def get_cycle(self, cycle_id: str, today: Optional[date] = None) -> VacationCycle:
        today = today or today_local()
        employee_id = employee_id_from_cycle_id(cycle_id)
        emp = self._employees.get_by_id(employee_id)
        if not emp or not is_vacation_eligible(emp):
            raise NotFoundError(f"No vacation cycles for employee {employee_id}")

        for c in self.build_cycles(emp, today):
            if c.cycle_id == cycle_id:
                return c
        raise NotFoundError(f"Cycle {cycle_id} not found")

    # -------- Write path --------
    def propose_leave(
        self,
        *,
        cycle_id: str,
        start: DateLike,
        end: DateLike,
        excluding_leave_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> LeaveProposal:
        cycle = self.get_cycle(cycle_id, today)
        return self._scheduler.propose_leave(
            employee_id=cycle.employee.employee_id,
            cycle_id=cycle.cycle_id,
            start=parse_date(start, "leave start"),
            end=parse_date(end, "leave end"),
            excluding_leave_id=excluding_leave_id,
        )

    def schedule_leave(
        self,
        *,
        cycle_id: str,
        start: DateLike,
        end: DateLike,
        today: Optional[date] = None,
    ) -> LeavePeriod:
        cycle = self.get_cycle(cycle_id, today)
        leave = LeavePeriod.create(parse_date(start, "leave start"), parse_date(end, "leave end"))
        return self._scheduler.commit_leave(cycle_id=cycle.cycle_id, leave=leave, mode=LeaveMode.CREATE)

    def reschedule_leave(
        self,
        *,
        cycle_id: str,
        leave_id: str,
        start: DateLike,
        end: DateLike,
        today: Optional[date] = None,
    ) -> LeavePeriod:
        cycle = self.get_cycle(cycle_id, today)
        leave = LeavePeriod.create(
            parse_date(start, "leave start"),
            parse_date(end, "leave end"),
            leave_id=require_non_empty(leave_id, "Leave id"),
        )
        return self._scheduler.commit_leave(cycle_id=cycle.cycle_id, leave=leave, mode=LeaveMode.UPDATE)

    def remove_leave(self, *, cycle_id: str, leave_id: str) -> LeavePeriod:
        return self._scheduler.remove_leave(cycle_id=cycle_id, leave_id=require_non_empty(leave_id, "Leave id"))

    def clear_cycle(self, *, cycle_id: str) -> None:
        self._scheduler.clear_cycle(cycle_id=cycle_id)
