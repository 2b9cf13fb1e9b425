from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from ..core.enums import EmploymentCategory, EmploymentStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, as supplied by the employee registry.

    The vacation engine only reads it. ``admission_date``, ``status`` and
    ``category`` keep the raw values from the registry; they are parsed when
    needed so that one bad record only affects that employee.
    """

    employee_id: str
    name: str
    role: str
    admission_date: Union[date, str]
    status: Union[EmploymentStatus, str]
    category: Union[EmploymentCategory, str]

    @property
    def employment_status(self) -> EmploymentStatus:
        try:
            return EmploymentStatus(self.status)
        except ValueError:
            raise ValidationError(f"Invalid employment status: {self.status!r}") from None

    @property
    def employment_category(self) -> EmploymentCategory:
        try:
            return EmploymentCategory(self.category)
        except ValueError:
            raise ValidationError(f"Invalid employment category: {self.category!r}") from None

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE
