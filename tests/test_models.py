"""Tests for the links table definition."""

from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite

from models import Link, click_timestamp


def compiled(stmt, dialect):
    return str(stmt.compile(dialect=dialect))


def test_click_time_taken_by_postgres_at_write():
    stmt = update(Link).values(last_clicked=click_timestamp())

    assert "clock_timestamp()" in compiled(stmt, postgresql.dialect())


def test_click_time_taken_by_sqlite_at_write():
    stmt = update(Link).values(last_clicked=click_timestamp())

    assert "CURRENT_TIMESTAMP" in compiled(stmt, sqlite.dialect())


def test_code_column_fits_longest_code():
    assert Link.__table__.c.code.type.length == 8
    assert Link.__table__.c.code.unique
