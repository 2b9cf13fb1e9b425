from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from .core.constants import DEFAULT_FLOOR_DATE, DEFAULT_MAX_CYCLE_ITERATIONS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .vacations.mysql_schedule_repository import MySQLScheduleRepository
from .vacations.scheduler import LeaveScheduler
from .vacations.service import VacationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    schedules_repo: MySQLScheduleRepository

    leave_scheduler: LeaveScheduler
    vacation_service: VacationService


def build_container(
    *,
    db_config: Mapping[str, Any],
    floor_date: date = DEFAULT_FLOOR_DATE,
    max_iterations: int = DEFAULT_MAX_CYCLE_ITERATIONS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)

    leave_scheduler = LeaveScheduler(schedules_repo)
    vacation_service = VacationService(
        employees_repo,
        schedules_repo,
        scheduler=leave_scheduler,
        floor_date=floor_date,
        max_iterations=max_iterations,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        schedules_repo=schedules_repo,
        leave_scheduler=leave_scheduler,
        vacation_service=vacation_service,
    )
