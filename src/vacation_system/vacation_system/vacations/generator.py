from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterator

from ..common.datetime_utils import add_years, parse_date
from ..core.constants import DEFAULT_FLOOR_DATE, DEFAULT_MAX_CYCLE_ITERATIONS
from ..core.enums import EmploymentCategory
from ..employees.model import Employee
from .model import CycleWindow, make_cycle_id

logger = logging.getLogger(__name__)


def is_vacation_eligible(employee: Employee) -> bool:
    """Only active employees outside the elected-official category accrue vacation.

    Raises ValidationError when the registry status or category is unknown.
    """
    return employee.is_active and employee.employment_category != EmploymentCategory.ELECTED_OFFICIAL


def cycle_window(employee_id: str, admission: date, cycle_index: int) -> CycleWindow:
    start = add_years(admission, cycle_index)
    end = add_years(admission, cycle_index + 1) - timedelta(days=1)
    return CycleWindow(
        cycle_id=make_cycle_id(employee_id, start.year),
        employee_id=employee_id,
        acquisition_start=start,
        acquisition_end=end,
        concessive_deadline=add_years(end, 1),
    )


def generate_cycles(
    employee: Employee,
    today: date,
    *,
    floor_date: date = DEFAULT_FLOOR_DATE,
    max_iterations: int = DEFAULT_MAX_CYCLE_ITERATIONS,
) -> Iterator[CycleWindow]:
    """Yield the completed acquisition cycles of ``employee`` in order.

    Walks forward one year at a time from the admission date. A cycle whose
    acquisition end is after ``today`` is still accruing, so the walk stops
    there. Cycles starting before ``floor_date`` are walked over but not
    yielded. ``max_iterations`` bounds the walk to cycle indices
    ``0..max_iterations``; when completed cycles remain beyond that, a
    warning is logged and the sequence ends with what was produced so far.

    The admission date is parsed eagerly, so a malformed value raises
    MalformedDateError on the call itself rather than on first iteration.
    """
    admission = parse_date(employee.admission_date, "admission date")
    return _walk_cycles(employee.employee_id, admission, today, floor_date, int(max_iterations))


def _walk_cycles(
    employee_id: str,
    admission: date,
    today: date,
    floor_date: date,
    max_iterations: int,
) -> Iterator[CycleWindow]:
    for cycle_index in range(max_iterations + 1):
        window = cycle_window(employee_id, admission, cycle_index)
        if window.acquisition_end > today:
            return
        if window.acquisition_start >= floor_date:
            yield window

    if cycle_window(employee_id, admission, max_iterations + 1).acquisition_end > today:
        return
    logger.warning(
        "Cycle generation for employee %s stopped at the %d iteration cap",
        employee_id,
        max_iterations,
    )
