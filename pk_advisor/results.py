"""Lazy, single-pass iteration over an executed catalog query."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

import psycopg2

from pk_advisor.errors import MetaDataAccessError, translate

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EMPTY = object()

FETCH_ERROR = "Could not fetch the next row from the catalog query."


def raise_metadata_error(exc: psycopg2.Error) -> None:
    """Default fetch-failure handler: translate and raise."""
    raise translate(exc, FETCH_ERROR, None) from exc


class ResultSequence(Generic[T]):
    """Forward-only sequence of converted rows pulled from a DB-API cursor.

    Each pull performs one ``fetchone()`` and runs the row through
    ``convert_row``. A driver error during a fetch is passed to ``on_error``,
    which must raise; the sequence is closed first and never yields a
    partial value in its place.

    The cursor is closed once the rows are exhausted, on ``close()``, or when
    used as a context manager. The connection is never touched.
    """

    def __init__(
        self,
        cursor: Any,
        convert_row: Callable[[Any], T],
        on_error: Callable[[psycopg2.Error], None] = raise_metadata_error,
    ):
        self._cursor = cursor
        self._convert_row = convert_row
        self._on_error = on_error
        self._pending = _EMPTY

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def has_next(self) -> bool:
        if self._pending is not _EMPTY:
            return True
        if self._cursor is None:
            return False
        row = self._fetch()
        if row is None:
            self.close()
            return False
        self._pending = row
        return True

    def next(self) -> T:
        if not self.has_next():
            raise StopIteration
        row, self._pending = self._pending, _EMPTY
        try:
            return self._convert_row(row)
        except Exception:
            self.close()
            raise

    def __iter__(self):
        return self

    def __next__(self) -> T:
        return self.next()

    def close(self) -> None:
        cursor, self._cursor = self._cursor, None
        self._pending = _EMPTY
        if cursor is not None:
            cursor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _fetch(self):
        try:
            return self._cursor.fetchone()
        except psycopg2.Error as exc:
            logger.debug("Fetch failed, closing cursor: %s", exc)
            self.close()
            self._on_error(exc)
            # on_error is required to raise
            raise MetaDataAccessError(FETCH_ERROR, cause=exc) from exc
