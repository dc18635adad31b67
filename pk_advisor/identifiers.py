"""Identifier case folding applied before catalog lookups."""

from __future__ import annotations

LOWER = "lower"
UPPER = "upper"
PRESERVE = "preserve"

POLICIES = (LOWER, UPPER, PRESERVE)


def resolve_policy(policy: str) -> str:
    """Validate a case policy name, e.g. from a config file."""
    normalized = policy.strip().lower()
    if normalized not in POLICIES:
        raise ValueError(
            f"Unknown identifier case policy: {policy!r} (expected one of {', '.join(POLICIES)})"
        )
    return normalized


def fold_case(identifier: str | None, policy: str = LOWER) -> str | None:
    """Fold *identifier* the way the catalog stores unquoted names.

    ``None`` passes through unchanged. Folding is idempotent.
    """
    if identifier is None:
        return None
    if policy == LOWER:
        return identifier.lower()
    if policy == UPPER:
        return identifier.upper()
    return identifier
