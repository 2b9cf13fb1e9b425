from __future__ import annotations

from pathlib import Path

from src.vacation_system.vacation_system.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_semicolons_inside_quotes_and_comments_do_not_split():
    sql = """
    -- note; not a statement
    INSERT INTO t VALUES ('a;b', "c;d", 'it''s; fine');
    # another; comment
    SELECT 1
    """

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b', \"c;d\", 'it''s; fine')",
        "SELECT 1",
    ]


def test_schema_file_yields_one_statement_per_table():
    sql = _strip_create_db_and_use((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS employees")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS vacation_schedules")


def test_seed_file_keeps_json_payload_intact():
    statements = list(iter_sql_statements((DATABASE_DIR / "seed.sql").read_text(encoding="utf-8")))

    assert len(statements) == 2
    assert '\'{"start": "05/01/2026", "end": "03/02/2026"}\'' in statements[1]
