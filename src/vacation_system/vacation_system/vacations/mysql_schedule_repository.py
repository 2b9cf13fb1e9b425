from __future__ import annotations

import json
from typing import Any, Iterator, Sequence

from ..core.constants import SCHEDULES_TABLE
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import LeavePeriod, employee_id_from_cycle_id
from .repository import ScheduleRepository


def decode_leaves(cycle_id: str, payload: Any) -> list[LeavePeriod]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise StoreError(f"Schedule {cycle_id!r} is not in list format; run the legacy migration")
    return [LeavePeriod.from_record(item) for item in payload]


def encode_leaves(leaves: Sequence[LeavePeriod]) -> list[dict]:
    return [leave.to_record() for leave in leaves]


class MySQLScheduleRepository(ScheduleRepository):
    """Key/value schedule store on a single MySQL table.

    Each row holds one cycle's full leave list as a JSON array, so replacing
    a list is a single-statement upsert.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, table: str = SCHEDULES_TABLE):
        self._conn_factory = conn_factory
        self._table = table

    def get(self, cycle_id: str) -> list[LeavePeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT payload FROM {self._table} WHERE cycle_id=%s",
                (str(cycle_id),),
            )
            r = fetchone(cur)
            if not r:
                return []
            return decode_leaves(cycle_id, load_json_column(r["payload"]))

    def put(self, cycle_id: str, leaves: Sequence[LeavePeriod]) -> None:
        self.put_raw(cycle_id, encode_leaves(leaves))

    def delete(self, cycle_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE cycle_id=%s", (str(cycle_id),))

    def list_for_employee(self, employee_id: str) -> dict[str, list[LeavePeriod]]:
        prefix = str(employee_id).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT cycle_id, payload
                FROM {self._table}
                WHERE cycle_id LIKE %s
                ORDER BY cycle_id ASC
                """,
                (prefix + "-%",),
            )
            rows = fetchall(cur)

        out: dict[str, list[LeavePeriod]] = {}
        for r in rows:
            cycle_id = str(r["cycle_id"])
            # The prefix for employee "12" also matches cycles of employee "12-3".
            if employee_id_from_cycle_id(cycle_id) != str(employee_id):
                continue
            out[cycle_id] = decode_leaves(cycle_id, load_json_column(r["payload"]))
        return out

    def iter_raw(self) -> Iterator[tuple[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT cycle_id, payload FROM {self._table} ORDER BY cycle_id ASC")
            rows = fetchall(cur)
        for r in rows:
            yield str(r["cycle_id"]), load_json_column(r["payload"])

    def put_raw(self, cycle_id: str, payload: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table}(cycle_id, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (str(cycle_id), json.dumps(payload)),
            )
