"""Domain error for catalog metadata access failures."""

from __future__ import annotations

from typing import Callable, Optional

SUGGESTED_STRATEGY_ERROR = (
    "Could not get list of suggested identity strategies from database. "
    "Probably a database driver problem."
)


class MetaDataAccessError(Exception):
    """Raised when a catalog query fails to prepare, execute, or fetch.

    Attributes:
        message: Human-readable description of the failed operation.
        statement: The SQL statement that failed, when known.
        cause: The underlying driver error.
    """

    def __init__(
        self,
        message: str,
        statement: str | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message
        self.statement = statement
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message.strip()
        if self.cause is not None:
            text += f" [{type(self.cause).__name__}: {str(self.cause).strip()}]"
        if self.statement:
            text += f" [SQL: {self.statement.strip()}]"
        return text

    @property
    def sqlstate(self) -> str | None:
        """SQLSTATE code reported by the server, if the driver provided one."""
        return getattr(self.cause, "pgcode", None)


SQLExceptionConverter = Callable[[BaseException, str, Optional[str]], MetaDataAccessError]


def translate(
    cause: BaseException, message: str, statement: str | None = None
) -> MetaDataAccessError:
    """Convert a driver error into a MetaDataAccessError chained to *cause*."""
    error = MetaDataAccessError(message, statement=statement, cause=cause)
    error.__cause__ = cause
    return error
