"""Plain-text report renderer."""

from __future__ import annotations

from pk_advisor.models import SuggestionReport


def render(report: SuggestionReport) -> str:
    lines = [
        f"pk-advisor: {report.database} on {report.host}:{report.port} ({report.dialect})",
        f"Locator: {report.locator}",
    ]
    if report.pg_version:
        lines.append(f"Server: {report.pg_version}")
    lines.append("")

    if not report.decisions:
        lines.append("No primary-key columns matched.")
        return "\n".join(lines) + "\n"

    for d in report.decisions:
        strategy = d.strategy or "(default)"
        column = f"{d.schema_name}.{d.table_name}.{d.column_name}"
        line = f"  {column:40s} {strategy:10s}"
        if d.sequence_name:
            line += f" sequence={d.sequence_name}"
        lines.append(line.rstrip())

    lines.append("")
    lines.append(
        f"{len(report.decisions)} primary-key column(s) in {len(report.tables)} table(s): "
        f"{report.identity_count} identity, {report.undecided_count} default."
    )
    return "\n".join(lines) + "\n"
