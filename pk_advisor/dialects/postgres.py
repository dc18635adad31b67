"""PostgreSQL dialect: find primary-key columns and the sequences feeding them."""

from __future__ import annotations

import logging

from pk_advisor.dialects.base import MetaDataDialect
from pk_advisor.identifiers import LOWER
from pk_advisor.models import IDENTITY, CatalogRow, StrategyDecision, TableLocator

logger = logging.getLogger(__name__)

PRIMARY_KEY_STRATEGY_QUERY = """
    SELECT
        nsp.nspname,
        cls.relname,
        att.attname,
        att.attidentity,
        con.conname,
        pg_get_serial_sequence(quote_ident(nsp.nspname) || '.' || quote_ident(cls.relname), att.attname) AS seqname
    FROM pg_catalog.pg_namespace nsp,
         pg_catalog.pg_class cls,
         pg_catalog.pg_constraint con,
         pg_catalog.pg_attribute att
    WHERE cls.relnamespace = nsp.oid
      AND con.conrelid = cls.oid
      AND att.attrelid = cls.oid
      AND att.attnum = ANY(con.conkey)
      AND con.contype = 'p'"""


class PostgresDialect(MetaDataDialect):
    name = "postgres"
    description = "PostgreSQL system catalogs (pg_namespace, pg_class, pg_constraint, pg_attribute)"
    identifier_case = LOWER

    def build_primary_key_strategy_query(self, locator: TableLocator) -> tuple[str, list]:
        # pg_catalog has no catalog-scoping column, so locator.catalog is ignored.
        conditions = []
        params = []
        if locator.schema is not None:
            conditions.append("nsp.nspname = %s")
            params.append(locator.schema)
        if locator.table is not None:
            conditions.append("cls.relname = %s")
            params.append(locator.table)

        sql = PRIMARY_KEY_STRATEGY_QUERY
        if conditions:
            sql += "\n      AND " + " AND ".join(conditions)
        return sql, params

    def convert_row(self, row) -> StrategyDecision:
        if not isinstance(row, CatalogRow):
            row = CatalogRow.from_tuple(row)

        logger.debug(
            "Catalog row: nspname=%s relname=%s attname=%s attidentity=%r conname=%s seqname=%s",
            row.nspname,
            row.relname,
            row.attname,
            row.attidentity,
            row.conname,
            row.seqname,
        )

        # Any sequence means "identity", even when attidentity is empty. A
        # "sequence" strategy needs the sequence's increment interval, which
        # is not looked up yet.
        strategy = IDENTITY if row.seqname else None

        return StrategyDecision(
            table_name=row.relname,
            schema_name=row.nspname,
            catalog_name=None,
            strategy=strategy,
            column_name=row.attname,
            constraint_name=row.conname,
            sequence_name=row.seqname or None,
        )
