from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator, Mapping

from .connection import DBConfig, DatabaseConnection


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


# Only quoted values and comments can hide a ";" that does not end a statement.
_SQL_TOKEN = re.compile(
    r"""
      (?P<quoted>'(?:\\.|''|[^'\\])*'|"(?:\\.|""|[^"\\])*")
    | (?P<comment>--[^\n]*|\#[^\n]*)
    | (?P<end>;)
    """,
    re.VERBOSE | re.DOTALL,
)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema/seed script into statements.

    ``;`` inside quoted values does not end a statement; ``--`` and ``#``
    comments are dropped.
    """
    parts: list[str] = []
    pos = 0
    for m in _SQL_TOKEN.finditer(sql):
        parts.append(sql[pos:m.start()])
        pos = m.end()
        if m.lastgroup == "quoted":
            parts.append(m.group())
        elif m.lastgroup == "end":
            stmt = "".join(parts).strip()
            parts = []
            if stmt:
                yield stmt
    parts.append(sql[pos:])
    tail = "".join(parts).strip()
    if tail:
        yield tail


def _factory(db_config: Mapping[str, Any]) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def ensure_database_exists(db_config: Mapping[str, Any]) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: Mapping[str, Any], *, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping[str, Any], *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)


def list_tables(db_config: Mapping[str, Any]) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
