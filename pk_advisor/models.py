"""Data models for table locators, catalog rows, and strategy decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

# The only strategy token emitted. A detected sequence is reported as
# "identity" until the sequence's increment interval can be carried along.
IDENTITY = "identity"


@dataclass(frozen=True)
class TableLocator:
    """Catalog/schema/table triple. ``None`` in any field means unfiltered."""

    catalog: str | None = None
    schema: str | None = None
    table: str | None = None

    def normalized(self, fold: Callable[[str | None], str | None]) -> TableLocator:
        return TableLocator(
            catalog=fold(self.catalog),
            schema=fold(self.schema),
            table=fold(self.table),
        )

    def __str__(self):
        return ".".join(part or "*" for part in (self.catalog, self.schema, self.table))


@dataclass
class CatalogRow:
    nspname: str
    relname: str
    attname: str
    attidentity: str
    conname: str
    seqname: str | None = None

    @classmethod
    def from_tuple(cls, row) -> CatalogRow:
        """Build from a cursor row in select-list order."""
        nspname, relname, attname, attidentity, conname, seqname = row
        return cls(
            nspname=nspname,
            relname=relname,
            attname=attname,
            attidentity=attidentity,
            conname=conname,
            seqname=seqname,
        )


@dataclass
class StrategyDecision:
    table_name: str
    schema_name: str
    catalog_name: str | None = None
    strategy: str | None = None
    column_name: str = ""
    constraint_name: str = ""
    sequence_name: str | None = None

    def as_dict(self) -> dict:
        """Return the fixed-key mapping consumed by reverse-engineering tools."""
        return {
            "TABLE_NAME": self.table_name,
            "TABLE_SCHEM": self.schema_name,
            "TABLE_CAT": self.catalog_name,
            "STRATEGY": self.strategy,
        }


@dataclass
class SuggestionReport:
    database: str
    host: str
    port: int
    timestamp: datetime
    locator: TableLocator
    dialect: str = "postgres"
    pg_version: str = ""
    decisions: list[StrategyDecision] = field(default_factory=list)

    @property
    def identity_count(self) -> int:
        return sum(1 for d in self.decisions if d.strategy == IDENTITY)

    @property
    def undecided_count(self) -> int:
        return sum(1 for d in self.decisions if d.strategy is None)

    @property
    def tables(self) -> list[str]:
        seen = []
        for d in self.decisions:
            fqn = f"{d.schema_name}.{d.table_name}"
            if fqn not in seen:
                seen.append(fqn)
        return seen
