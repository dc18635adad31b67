"""Primary-key strategy suggestions from live catalog metadata."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

import psycopg2

from pk_advisor.dialects.base import MetaDataDialect
from pk_advisor.errors import SUGGESTED_STRATEGY_ERROR, SQLExceptionConverter, translate
from pk_advisor.identifiers import resolve_policy
from pk_advisor.models import StrategyDecision, TableLocator
from pk_advisor.registry import DEFAULT_DIALECT, get_dialect
from pk_advisor.results import ResultSequence

logger = logging.getLogger(__name__)


class StrategyAdvisor:
    """Suggests primary-key strategies for tables reachable through a connection.

    Attributes:
        dialect: Catalog dialect that renders the query and converts rows.
        converter: Turns a driver error, message and statement into a
            MetaDataAccessError.
    """

    def __init__(
        self,
        connection_provider: Callable[[], Any] | Any,
        dialect: MetaDataDialect | str | None = None,
        converter: SQLExceptionConverter = translate,
        identifier_case: str | None = None,
    ):
        if dialect is None or isinstance(dialect, str):
            dialect = get_dialect(dialect or DEFAULT_DIALECT, identifier_case=identifier_case)
        elif identifier_case is not None:
            dialect = copy.copy(dialect)
            dialect.identifier_case = resolve_policy(identifier_case)
        self.dialect = dialect
        self.converter = converter
        self._connection_provider = connection_provider

    def get_connection(self):
        if callable(self._connection_provider):
            return self._connection_provider()
        return self._connection_provider

    def get_sql_exception_converter(self) -> SQLExceptionConverter:
        return self.converter

    def suggested_primary_key_strategy(
        self,
        catalog: str | None = None,
        schema: str | None = None,
        table: str | None = None,
    ) -> ResultSequence[StrategyDecision]:
        """Query the catalog for primary-key columns and their sequences.

        Returns:
            A lazy ResultSequence yielding one StrategyDecision per primary-key
            column, in cursor order. A table without a primary key yields none.

        Raises:
            MetaDataAccessError: The query could not be executed. Fetch failures
                are raised later, from the returned sequence.
        """
        locator = TableLocator(catalog, schema, table).normalized(self.dialect.normalize)
        logger.debug("suggested_primary_key_strategy(%s) using %s", locator, self.dialect.name)

        sql, params = self.dialect.build_primary_key_strategy_query(locator)
        logger.debug("Querying for primary-key sequences: %s params=%s", sql, params)

        converter = self.get_sql_exception_converter()
        cursor = None
        try:
            cursor = self.get_connection().cursor()
            cursor.execute(sql, params)
        except psycopg2.Error as exc:
            if cursor is not None:
                cursor.close()
            raise converter(exc, SUGGESTED_STRATEGY_ERROR, sql) from exc

        def on_error(exc: psycopg2.Error) -> None:
            raise converter(exc, SUGGESTED_STRATEGY_ERROR, None) from exc

        return ResultSequence(cursor, self.dialect.convert_row, on_error)


def suggest_primary_key_strategy(
    conn,
    catalog: str | None = None,
    schema: str | None = None,
    table: str | None = None,
    dialect: str = DEFAULT_DIALECT,
    identifier_case: str | None = None,
) -> ResultSequence[StrategyDecision]:
    """Convenience wrapper: one-off suggestion query on an open connection."""
    advisor = StrategyAdvisor(conn, dialect=dialect, identifier_case=identifier_case)
    return advisor.suggested_primary_key_strategy(catalog, schema, table)
