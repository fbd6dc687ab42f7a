from __future__ import annotations

import re

from guardforce.database.bootstrap import SCHEMA_PATH, _strip_create_db_and_use, iter_sql_statements


def test_splits_on_semicolons_outside_quotes_and_comments():
    sql = """
    -- leading comment; not a statement
    CREATE TABLE a (x VARCHAR(10) DEFAULT 'a;b');
    INSERT INTO a VALUES ('it\\'s; fine'); -- trailing
    SELECT 1
    """

    stmts = list(iter_sql_statements(sql))

    assert len(stmts) == 3
    assert stmts[0].startswith("CREATE TABLE a") and "'a;b'" in stmts[0]
    assert "it\\'s; fine" in stmts[1]
    assert stmts[2] == "SELECT 1"


def test_strips_create_database_and_use():
    sql = "CREATE DATABASE foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_schema_creates_every_table():
    stmts = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))
    tables = [re.search(r"CREATE TABLE IF NOT EXISTS (\w+)", s).group(1) for s in stmts]

    assert tables == [
        "users",
        "company_settings",
        "sites",
        "staffing_requirements",
        "guards",
        "shifts",
        "attendance_records",
        "invoices",
        "temporary_staffing_requests",
        "utility_charges",
        "payment_records",
    ]
