"""Tests for pk_advisor.errors — translating driver errors."""

from __future__ import annotations

import psycopg2

from pk_advisor.errors import SUGGESTED_STRATEGY_ERROR, MetaDataAccessError, translate


class TestTranslate:
    def test_returns_metadata_error(self):
        cause = psycopg2.ProgrammingError("relation does not exist")
        error = translate(cause, "Could not read catalog.", "SELECT 1")
        assert isinstance(error, MetaDataAccessError)
        assert error.message == "Could not read catalog."
        assert error.statement == "SELECT 1"
        assert error.cause is cause

    def test_chains_cause(self):
        cause = psycopg2.OperationalError("gone")
        assert translate(cause, "msg").__cause__ is cause

    def test_statement_optional(self):
        error = translate(psycopg2.DatabaseError("boom"), SUGGESTED_STRATEGY_ERROR)
        assert error.statement is None
        assert "SQL:" not in str(error)

    def test_str_includes_message_cause_and_statement(self):
        error = translate(psycopg2.DatabaseError("boom"), "Failed.", "SELECT 1")
        text = str(error)
        assert "Failed." in text
        assert "boom" in text
        assert "SELECT 1" in text

    def test_sqlstate_absent_for_client_errors(self):
        error = translate(psycopg2.DatabaseError("boom"), "Failed.")
        assert error.sqlstate is None


class TestMetaDataAccessError:
    def test_is_exception(self):
        assert issubclass(MetaDataAccessError, Exception)

    def test_message_only(self):
        error = MetaDataAccessError("Failed.")
        assert str(error) == "Failed."
        assert error.cause is None
