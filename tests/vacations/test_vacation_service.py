from __future__ import annotations

from datetime import date

import pytest

from conftest import InMemoryEmployees, InMemorySchedules, make_employee
from src.vacation_system.vacation_system.core.enums import (
    CycleSortKey,
    CycleStatus,
    EmploymentCategory,
    EmploymentStatus,
)
from src.vacation_system.vacation_system.core.exceptions import (
    LeaveRejectedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from src.vacation_system.vacation_system.vacations.service import VacationService

TODAY = date(2026, 11, 15)


def _record(leave_id: str, start: str, end: str, days: int) -> dict:
    return {"id": leave_id, "start": start, "end": end, "days": days}


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            make_employee("7", name="Ana Souza", admission_date="10/03/2018"),
            make_employee("8", name="Bruno Lima", admission_date="2023-01-01"),
            make_employee("9", name="Carla Dias", category=EmploymentCategory.ELECTED_OFFICIAL),
            make_employee("10", name="Davi Rocha", status=EmploymentStatus.TERMINATED),
            make_employee("11", name="Eva Prado", admission_date="31/02/2020"),
            make_employee("12", name="Fabio Reis", admission_date="01/02/2024"),
        ]
    )


@pytest.fixture
def schedules() -> InMemorySchedules:
    return InMemorySchedules(
        {
            "8-2025": [_record("s1", "2026-12-01", "2026-12-10", 10), _record("s0", "2026-02-01", "2026-02-10", 10)],
            "12-2025": [_record("c1", "2026-03-01", "2026-03-30", 30)],
        }
    )


@pytest.fixture
def service(employees, schedules) -> VacationService:
    return VacationService(employees, schedules)


def test_listing_covers_eligible_employees_and_reports_skipped(service):
    listing = service.list_cycles(TODAY)

    assert [c.cycle_id for c in listing.cycles] == ["7-2025", "8-2025"]
    assert [s.employee_id for s in listing.skipped] == ["11"]
    assert "admission date" in listing.skipped[0].reason


def test_listing_classifies_each_cycle(service):
    by_id = {c.cycle_id: c for c in service.list_cycles(TODAY).cycles}

    assert by_id["7-2025"].status == CycleStatus.ACQUIRED
    assert by_id["7-2025"].remaining_days == 30
    assert by_id["8-2025"].status == CycleStatus.SCHEDULED
    assert by_id["8-2025"].remaining_days == 10


def test_completed_cycles_are_not_listed_but_still_readable(service):
    assert "12-2025" not in {c.cycle_id for c in service.list_cycles(TODAY).cycles}

    cycle = service.get_cycle("12-2025", TODAY)
    assert cycle.status == CycleStatus.COMPLETED
    assert cycle.remaining_days == 0


def test_status_filter_and_acquired_means_balance_left(service):
    scheduled = service.list_cycles(TODAY, status=CycleStatus.SCHEDULED).cycles
    with_balance = service.list_cycles(TODAY, status=CycleStatus.ACQUIRED).cycles

    assert [c.cycle_id for c in scheduled] == ["8-2025"]
    assert [c.cycle_id for c in with_balance] == ["7-2025", "8-2025"]


def test_overdue_cycles_once_deadline_passes(service):
    later = date(2027, 6, 1)

    overdue = service.list_cycles(later, status=CycleStatus.OVERDUE).cycles

    # 8-2025 still has 10 unused days once its leaves are over.
    assert [c.cycle_id for c in overdue] == ["7-2025", "8-2025"]
    assert all(c.is_overdue_double for c in overdue)


def test_search_matches_name_or_id(service):
    by_name = service.list_cycles(TODAY, search="  bruNO ").cycles
    by_id = service.list_cycles(TODAY, search="7").cycles

    assert [c.employee.employee_id for c in by_name] == ["8"]
    assert [c.employee.employee_id for c in by_id] == ["7"]


def test_sort_by_balance(service):
    ascending = service.list_cycles(TODAY, sort_by=CycleSortKey.BALANCE).cycles
    descending = service.list_cycles(TODAY, sort_by=CycleSortKey.BALANCE, descending=True).cycles

    assert [c.remaining_days for c in ascending] == [10, 30]
    assert [c.remaining_days for c in descending] == [30, 10]


def test_summary_counts(service):
    s = service.summary(TODAY)

    assert s.total == 2
    assert s.overdue == 0
    assert s.with_balance == 2
    assert s.in_progress == 0
    assert s.scheduled == 1


def test_unmigrated_schedule_skips_only_that_employee(employees):
    schedules = InMemorySchedules({"7-2025": {"start": "05/01/2026", "end": "03/02/2026"}})
    service = VacationService(employees, schedules)

    listing = service.list_cycles(TODAY)

    assert "7" in {s.employee_id for s in listing.skipped}
    assert "8-2025" in {c.cycle_id for c in listing.cycles}


def test_store_outage_is_not_swallowed(employees):
    class DownSchedules(InMemorySchedules):
        def list_for_employee(self, employee_id):
            raise StoreUnavailableError("connection refused")

    service = VacationService(employees, DownSchedules())

    with pytest.raises(StoreUnavailableError):
        service.list_cycles(TODAY)


def test_schedule_leave_accepts_either_date_format(service, schedules):
    leave = service.schedule_leave(cycle_id="7-2025", start="2026-12-01", end="15/12/2026", today=TODAY)

    assert leave.days == 15
    cycle = service.get_cycle("7-2025", TODAY)
    assert cycle.status == CycleStatus.SCHEDULED
    assert cycle.remaining_days == 15
    assert schedules.payloads["7-2025"][0]["start"] == "2026-12-01"


def test_schedule_leave_rejection_bubbles_up(service):
    with pytest.raises(LeaveRejectedError):
        service.schedule_leave(cycle_id="8-2025", start="2026-12-05", end="2026-12-08", today=TODAY)


def test_propose_leave_reports_without_writing(service, schedules):
    proposal = service.propose_leave(cycle_id="8-2025", start="2026-12-05", end="2027-01-10", today=TODAY)

    assert proposal.overlaps is True
    assert proposal.exceeds_balance is True
    assert schedules.writes == 0


def test_reschedule_leave_moves_existing_leave(service):
    moved = service.reschedule_leave(
        cycle_id="8-2025", leave_id="s1", start="2026-12-03", end="2026-12-22", today=TODAY
    )

    assert moved.days == 20
    cycle = service.get_cycle("8-2025", TODAY)
    assert cycle.remaining_days == 0


def test_remove_and_clear(service, schedules):
    service.remove_leave(cycle_id="8-2025", leave_id="s1")
    assert [item["id"] for item in schedules.payloads["8-2025"]] == ["s0"]

    service.clear_cycle(cycle_id="8-2025")
    assert "8-2025" not in schedules.payloads


@pytest.mark.parametrize("cycle_id", ["7-2030", "9-2025", "404-2025"])
def test_unknown_or_ineligible_cycle_is_not_found(service, cycle_id):
    with pytest.raises(NotFoundError):
        service.get_cycle(cycle_id, TODAY)


def test_malformed_cycle_id_is_invalid(service):
    with pytest.raises(ValidationError):
        service.get_cycle("no-year-here", TODAY)


def test_non_positive_iteration_cap_is_refused(employees, schedules):
    with pytest.raises(ValidationError):
        VacationService(employees, schedules, max_iterations=0)
