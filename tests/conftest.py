from __future__ import annotations

import copy
from typing import Any, Iterator, Optional, Sequence

import pytest

from src.vacation_system.vacation_system.core.enums import EmploymentCategory, EmploymentStatus
from src.vacation_system.vacation_system.employees.model import Employee
from src.vacation_system.vacation_system.vacations.model import LeavePeriod, employee_id_from_cycle_id
from src.vacation_system.vacation_system.vacations.mysql_schedule_repository import decode_leaves, encode_leaves


class InMemorySchedules:
    """Schedule store keeping raw JSON-like payloads, like the MySQL table does."""

    def __init__(self, payloads: Optional[dict[str, Any]] = None):
        self.payloads: dict[str, Any] = dict(payloads or {})
        self.writes = 0

    def get(self, cycle_id: str) -> list[LeavePeriod]:
        return decode_leaves(cycle_id, copy.deepcopy(self.payloads.get(cycle_id)))

    def put(self, cycle_id: str, leaves: Sequence[LeavePeriod]) -> None:
        self.put_raw(cycle_id, encode_leaves(leaves))

    def delete(self, cycle_id: str) -> None:
        self.writes += 1
        self.payloads.pop(cycle_id, None)

    def list_for_employee(self, employee_id: str) -> dict[str, list[LeavePeriod]]:
        return {
            key: self.get(key)
            for key in sorted(self.payloads)
            if employee_id_from_cycle_id(key) == employee_id
        }

    def iter_raw(self) -> Iterator[tuple[str, Any]]:
        for key in sorted(self.payloads):
            yield key, copy.deepcopy(self.payloads[key])

    def put_raw(self, cycle_id: str, payload: Any) -> None:
        self.writes += 1
        self.payloads[cycle_id] = copy.deepcopy(payload)


class InMemoryEmployees:
    def __init__(self, employees: Sequence[Employee]):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self) -> Sequence[Employee]:
        return list(self._by_id.values())


def make_employee(
    employee_id: str = "7",
    *,
    name: str = "Ana Souza",
    admission_date: Any = "10/03/2018",
    status: EmploymentStatus = EmploymentStatus.ACTIVE,
    category: EmploymentCategory = EmploymentCategory.PERMANENT,
) -> Employee:
    return Employee(
        employee_id=employee_id,
        name=name,
        role="Assistente",
        admission_date=admission_date,
        status=status,
        category=category,
    )


@pytest.fixture
def schedules() -> InMemorySchedules:
    return InMemorySchedules()
