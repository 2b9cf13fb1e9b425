from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_employee(row: Dict[str, Any]) -> Employee:
        return Employee(
            employee_id=str(row["id"]),
            name=row["name"],
            role=row.get("role") or "",
            admission_date=row.get("admission_date") or "",
            status=str(row.get("status") or ""),
            category=str(row.get("regime") or ""),
        )

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, role, admission_date, status, regime
                FROM employees
                WHERE id=%s
                """,
                (str(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return self._to_employee(row)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, role, admission_date, status, regime
                FROM employees
                ORDER BY name ASC
                """
            )
            return [self._to_employee(r) for r in fetchall(cur)]
