"""pk-advisor: suggest ORM primary-key strategies from PostgreSQL catalog metadata."""

__version__ = "0.1.0"

from pk_advisor.advisor import StrategyAdvisor, suggest_primary_key_strategy  # noqa: E402
from pk_advisor.errors import MetaDataAccessError  # noqa: E402
from pk_advisor.models import IDENTITY, StrategyDecision, TableLocator  # noqa: E402

__all__ = [
    "IDENTITY",
    "MetaDataAccessError",
    "StrategyAdvisor",
    "StrategyDecision",
    "TableLocator",
    "suggest_primary_key_strategy",
    "__version__",
]
