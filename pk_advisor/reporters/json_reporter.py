"""JSON report renderer."""

from __future__ import annotations

import json

from pk_advisor import __version__
from pk_advisor.models import SuggestionReport


def render(report: SuggestionReport) -> str:
    """Render a SuggestionReport as a JSON string."""
    data = {
        "meta": {
            "tool": "pk-advisor",
            "version": __version__,
            "timestamp": report.timestamp.isoformat(),
            "database": report.database,
            "host": report.host,
            "port": report.port,
            "pg_version": report.pg_version,
            "dialect": report.dialect,
            "locator": {
                "catalog": report.locator.catalog,
                "schema": report.locator.schema,
                "table": report.locator.table,
            },
        },
        "summary": {
            "tables": len(report.tables),
            "primary_key_columns": len(report.decisions),
            "identity": report.identity_count,
            "undecided": report.undecided_count,
        },
        "decisions": [],
    }

    for decision in report.decisions:
        entry = decision.as_dict()
        entry["column"] = decision.column_name
        entry["constraint"] = decision.constraint_name
        entry["sequence"] = decision.sequence_name
        data["decisions"].append(entry)

    return json.dumps(data, indent=2)
