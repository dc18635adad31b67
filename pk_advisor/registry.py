"""Auto-discovery and selection of catalog dialects."""

from __future__ import annotations

import contextlib
import importlib
import inspect
import pkgutil
from pathlib import Path

from pk_advisor.dialects.base import MetaDataDialect

DEFAULT_DIALECT = "postgres"


def discover_dialects(identifier_case: str | None = None) -> list[MetaDataDialect]:
    """
    Discover and instantiate every concrete MetaDataDialect under pk_advisor.dialects.

    Parameters:
        identifier_case (str | None): Case policy override passed to each dialect;
            None keeps each dialect's own default.

    Returns:
        list[MetaDataDialect]: Instantiated dialects, sorted by name.
    """
    dialects_package = importlib.import_module("pk_advisor.dialects")
    assert dialects_package.__file__ is not None
    dialects_dir = Path(dialects_package.__file__).parent

    _import_submodules("pk_advisor.dialects", dialects_dir)

    instances = []
    seen = set()
    for cls in _all_subclasses(MetaDataDialect):
        if cls in seen or inspect.isabstract(cls):
            continue
        seen.add(cls)
        instances.append(cls(identifier_case=identifier_case))

    instances.sort(key=lambda d: d.name)
    return instances


def get_dialect(name: str = DEFAULT_DIALECT, identifier_case: str | None = None) -> MetaDataDialect:
    """Return the dialect registered under *name*.

    Raises:
        KeyError: No dialect with that name; the message lists the known names.
    """
    dialects = discover_dialects(identifier_case=identifier_case)
    for dialect in dialects:
        if dialect.name == name:
            return dialect
    available = ", ".join(d.name for d in dialects) or "none"
    raise KeyError(f"Unknown dialect {name!r} (available: {available})")


def _import_submodules(package_name: str, package_dir: Path):
    """Import every submodule of the package, skipping ones that fail to import."""
    for _importer, modname, _ispkg in pkgutil.walk_packages(
        path=[str(package_dir)],
        prefix=package_name + ".",
    ):
        with contextlib.suppress(Exception):
            importlib.import_module(modname)


def _all_subclasses(cls):
    """Collect direct and indirect subclasses of *cls*, depth-first."""
    result = []
    for sub in cls.__subclasses__():
        result.append(sub)
        result.extend(_all_subclasses(sub))
    return result
