"""Base class for catalog metadata dialects."""

from __future__ import annotations

import abc

from pk_advisor.identifiers import LOWER, fold_case, resolve_policy
from pk_advisor.models import StrategyDecision, TableLocator


class MetaDataDialect(abc.ABC):
    """Catalog-specific knowledge needed to suggest primary-key strategies.

    To support a new catalog, subclass this in a module under
    ``pk_advisor/dialects/``. The registry discovers subclasses at runtime and
    selects one by ``name``.

    Attributes:
        name: Identifier used in configuration (``dialect: postgres``).
        description: One-line summary shown by ``pk-advisor list-dialects``.
        identifier_case: How the catalog stores unquoted identifiers
            ("lower", "upper" or "preserve").
    """

    name: str = ""
    description: str = ""
    identifier_case: str = LOWER

    def __init__(self, identifier_case: str | None = None):
        if identifier_case is not None:
            self.identifier_case = resolve_policy(identifier_case)

    def normalize(self, identifier: str | None) -> str | None:
        return fold_case(identifier, self.identifier_case)

    @abc.abstractmethod
    def build_primary_key_strategy_query(self, locator: TableLocator) -> tuple[str, list]:
        """Render the primary-key/sequence query for an already-normalized locator.

        Returns:
            Tuple of (sql, params) ready for ``cursor.execute``.
        """
        ...

    @abc.abstractmethod
    def convert_row(self, row) -> StrategyDecision:
        """Turn one cursor row from the query above into a StrategyDecision."""
        ...

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.name:
            cls.name = cls.__name__

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} ({self.identifier_case})>"
