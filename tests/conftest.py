"""Shared fixtures for pk-advisor tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pk_advisor.models import StrategyDecision, SuggestionReport, TableLocator


def make_row(
    nspname: str = "public",
    relname: str = "orders",
    attname: str = "id",
    attidentity: str = "",
    conname: str = "orders_pkey",
    seqname: str | None = "public.orders_id_seq",
) -> tuple:
    """Factory for cursor rows in the primary-key strategy query's select order."""
    return (nspname, relname, attname, attidentity, conname, seqname)


class FakeCursor:
    """Minimal DB-API cursor serving canned rows.

    ``fail_at`` makes the fetch with that zero-based index raise ``error``;
    ``execute_error`` makes ``execute`` raise instead.
    """

    def __init__(self, rows=None, fail_at=None, error=None, execute_error=None):
        self.rows = list(rows or [])
        self.fail_at = fail_at
        self.error = error
        self.execute_error = execute_error
        self.executed = []
        self.fetch_count = 0
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self.execute_error is not None:
            raise self.execute_error

    def fetchone(self):
        if self.closed:
            raise AssertionError("fetchone() on a closed cursor")
        index = self.fetch_count
        self.fetch_count += 1
        if self.fail_at is not None and index == self.fail_at:
            raise self.error
        if index < len(self.rows):
            return self.rows[index]
        return None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.cursor_calls = 0

    def cursor(self):
        self.cursor_calls += 1
        return self._cursor


@pytest.fixture
def orders_cursor() -> FakeCursor:
    """Cursor holding one serial primary-key column on public.orders."""
    return FakeCursor(rows=[make_row()])


@pytest.fixture
def sample_report() -> SuggestionReport:
    report = SuggestionReport(
        database="testdb",
        host="localhost",
        port=5432,
        timestamp=datetime(2026, 1, 27, 12, 0, 0, tzinfo=timezone.utc),
        locator=TableLocator(None, "public", None),
        pg_version="PostgreSQL 17.0",
    )
    report.decisions = [
        StrategyDecision(
            table_name="orders",
            schema_name="public",
            strategy="identity",
            column_name="id",
            constraint_name="orders_pkey",
            sequence_name="public.orders_id_seq",
        ),
        StrategyDecision(
            table_name="order_items",
            schema_name="public",
            strategy=None,
            column_name="order_id",
            constraint_name="order_items_pkey",
        ),
        StrategyDecision(
            table_name="order_items",
            schema_name="public",
            strategy=None,
            column_name="line_no",
            constraint_name="order_items_pkey",
        ),
    ]
    return report
