"""Catalog metadata dialects, discovered by pk_advisor.registry."""
