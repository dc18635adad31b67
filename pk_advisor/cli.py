"""CLI entry point for pk-advisor."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime, timezone

from pk_advisor import __version__
from pk_advisor.config import OUTPUT_FORMATS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pk-advisor",
        description="Suggest ORM primary-key strategies from PostgreSQL catalog metadata.",
    )
    parser.add_argument("--version", action="version", version=f"pk-advisor {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # -- suggest --
    suggest_parser = subparsers.add_parser(
        "suggest", help="Suggest a primary-key strategy for each matching table"
    )
    _add_connection_args(suggest_parser)
    suggest_parser.add_argument("--catalog", help="Catalog (database) name; not used as a filter")
    suggest_parser.add_argument("--schema", "-s", help="Schema name (default: all schemas)")
    suggest_parser.add_argument("--table", "-t", help="Table name (default: all tables)")
    suggest_parser.add_argument("--dialect", help="Catalog dialect (default: postgres)")
    suggest_parser.add_argument(
        "--identifier-case",
        choices=["lower", "upper", "preserve"],
        help="Case folding applied to schema/table names (default: dialect's)",
    )
    suggest_parser.add_argument(
        "--format",
        "-f",
        choices=list(OUTPUT_FORMATS),
        default=None,
        help="Output format (default: text)",
    )
    suggest_parser.add_argument("--output", "-o", help="Output file path (default: stdout)")
    suggest_parser.add_argument("--config", "-c", help="Path to pk-advisor.yaml")
    suggest_parser.add_argument("--verbose", "-v", action="store_true", help="Log queries and rows")

    # -- list-dialects --
    subparsers.add_parser("list-dialects", help="List available catalog dialects")

    return parser


def _add_connection_args(parser: argparse.ArgumentParser):
    grp = parser.add_argument_group("connection")
    grp.add_argument("--dsn", help="PostgreSQL connection URI (postgres://...)")
    grp.add_argument("--host", "-H", default=None, help="Database host")
    grp.add_argument("--port", "-p", type=int, default=None, help="Database port (default: 5432)")
    grp.add_argument("--dbname", "-d", default=None, help="Database name")
    grp.add_argument("--user", "-U", default=None, help="Database user")
    grp.add_argument("--password", "-W", default=None, help="Database password")


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "list-dialects":
        _cmd_list_dialects(args)
    elif args.command == "suggest":
        _cmd_suggest(args)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _cmd_list_dialects(args):
    from pk_advisor.registry import discover_dialects

    dialects = discover_dialects()
    if not dialects:
        print("No dialects found.")
        return

    for dialect in dialects:
        print(f"  {dialect.name:15s} [{dialect.identifier_case}] {dialect.description}")


def _cmd_suggest(args):
    import psycopg2

    from pk_advisor.advisor import StrategyAdvisor
    from pk_advisor.config import load_config, merge_cli_with_config
    from pk_advisor.connection import connect, get_pg_version
    from pk_advisor.errors import MetaDataAccessError
    from pk_advisor.models import SuggestionReport, TableLocator

    _configure_logging(args.verbose)

    try:
        config = merge_cli_with_config(
            load_config(args.config),
            cli_dialect=args.dialect,
            cli_identifier_case=args.identifier_case,
            cli_format=args.format,
            host=args.host,
            port=args.port,
            dbname=args.dbname,
            user=args.user,
            dsn=args.dsn,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        conn = connect(
            host=config.connection.host,
            port=config.connection.port,
            dbname=config.connection.dbname,
            user=config.connection.user,
            password=args.password,
            dsn=config.connection.dsn,
        )
    except psycopg2.OperationalError as e:
        _report_connection_error(e, config.connection.host, config.connection.port)
        sys.exit(1)

    try:
        advisor = StrategyAdvisor(
            conn, dialect=config.dialect, identifier_case=config.identifier_case
        )
    except KeyError as e:
        conn.close()
        print(f"Error: {e.args[0]}", file=sys.stderr)
        sys.exit(1)

    try:
        report = SuggestionReport(
            database=config.connection.dbname or conn.info.dbname,
            host=config.connection.host or "localhost",
            port=config.connection.port or 5432,
            timestamp=datetime.now(timezone.utc),
            locator=TableLocator(args.catalog, args.schema, args.table),
            dialect=advisor.dialect.name,
            pg_version=get_pg_version(conn),
        )
        with advisor.suggested_primary_key_strategy(args.catalog, args.schema, args.table) as rows:
            report.decisions.extend(rows)
    except psycopg2.Error as e:
        print(f"Error: {type(e).__name__}: {str(e).strip()}", file=sys.stderr)
        sys.exit(1)
    except MetaDataAccessError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        print(f"       {e.cause}", file=sys.stderr)
        if e.statement:
            print(f"       while running: {e.statement.strip()}", file=sys.stderr)
        sys.exit(1)
    finally:
        conn.close()

    logger.info("Collected %d decision(s) for %s", len(report.decisions), report.locator)
    output = _render_report(report, config.output.format)
    _write_output(output, args.output)


def _report_connection_error(e, host: str | None, port: int | None):
    error_msg = str(e).strip()
    print("Error: Could not connect to database.", file=sys.stderr)
    print(f"       {error_msg}", file=sys.stderr)
    if "no password supplied" in error_msg:
        print("\nHint: Use --password to provide a password, or set PGPASSWORD environment variable.", file=sys.stderr)
    elif "does not exist" in error_msg:
        print("\nHint: Check that the database name is correct.", file=sys.stderr)
    elif "Connection refused" in error_msg or "could not connect" in error_msg.lower():
        print(f"\nHint: Check that PostgreSQL is running on {host or 'localhost'}:{port or 5432}.", file=sys.stderr)


def _write_output(output: str, path: str | None):
    """Write the report to *path*, or stdout when no path is given."""
    if not path:
        sys.stdout.write(output)
        return

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        f.write(output)
    print(f"Report written to {path}", file=sys.stderr)


def _render_report(report, fmt: str) -> str:
    if fmt == "json":
        from pk_advisor.reporters.json_reporter import render
    elif fmt == "text":
        from pk_advisor.reporters.text_reporter import render
    else:
        raise ValueError(f"Unknown format: {fmt}")
    return render(report)
