"""Configuration loading and management for pk-advisor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from pk_advisor.identifiers import resolve_policy
from pk_advisor.registry import DEFAULT_DIALECT

CONFIG_FILENAME = "pk-advisor.yaml"
OUTPUT_FORMATS = ("text", "json")


@dataclass
class ConnectionConfig:
    """Connection defaults. The password is never read from the config file."""

    host: str | None = None
    port: int | None = None
    dbname: str | None = None
    user: str | None = None
    dsn: str | None = None


@dataclass
class OutputConfig:
    format: str = "text"


@dataclass
class Config:
    """Complete configuration for pk-advisor."""

    dialect: str = DEFAULT_DIALECT
    identifier_case: str | None = None  # None = dialect default
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config_file() -> str | None:
    """Search for pk-advisor.yaml in cwd, then home dir.

    Returns:
        Path to config file if found, None otherwise.
    """
    for directory in (Path.cwd(), Path.home()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return str(candidate)
    return None


def load_config(config_path: str | None = None, auto_discover: bool = True) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file. If None and auto_discover is True,
                     searches default locations.
        auto_discover: If True and config_path is None, search for config file.

    Returns:
        Config object. Returns default config if no file found.

    Raises:
        FileNotFoundError: An explicit config_path does not exist.
        ValueError: The file holds an unknown identifier_case or output format.
    """
    if config_path is None and auto_discover:
        config_path = find_config_file()

    if config_path is None:
        return Config()

    if not os.path.isfile(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: dict) -> Config:
    """Parse YAML data into Config object."""
    config = Config()

    if data.get("dialect"):
        config.dialect = str(data["dialect"])

    if data.get("identifier_case") is not None:
        config.identifier_case = resolve_policy(str(data["identifier_case"]))

    if "connection" in data:
        conn_data = data["connection"] or {}
        port = conn_data.get("port")
        config.connection = ConnectionConfig(
            host=conn_data.get("host"),
            port=int(port) if port is not None else None,
            dbname=conn_data.get("dbname"),
            user=conn_data.get("user"),
            dsn=conn_data.get("dsn"),
        )

    if "output" in data:
        fmt = (data["output"] or {}).get("format", "text")
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {fmt!r}")
        config.output = OutputConfig(format=fmt)

    return config


def merge_cli_with_config(
    config: Config,
    cli_dialect: str | None = None,
    cli_identifier_case: str | None = None,
    cli_format: str | None = None,
    **cli_connection,
) -> Config:
    """Merge CLI arguments with config file settings.

    CLI arguments take precedence over config file. Connection keyword
    arguments (host, port, dbname, user, dsn) override the matching
    ConnectionConfig field when not None.

    Returns:
        A new Config with merged settings.
    """
    conn = config.connection
    merged_conn = ConnectionConfig(
        **{
            key: cli_connection.get(key) if cli_connection.get(key) is not None else getattr(conn, key)
            for key in ("host", "port", "dbname", "user", "dsn")
        }
    )

    return Config(
        dialect=cli_dialect or config.dialect,
        identifier_case=(
            resolve_policy(cli_identifier_case)
            if cli_identifier_case is not None
            else config.identifier_case
        ),
        connection=merged_conn,
        output=OutputConfig(format=cli_format or config.output.format),
    )
