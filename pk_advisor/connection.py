"""psycopg2 connections for catalog introspection."""

from __future__ import annotations

import os

import psycopg2
import psycopg2.extensions

APPLICATION_NAME = "pk-advisor"


def connect(
    host: str | None = None,
    port: int | None = None,
    dbname: str | None = None,
    user: str | None = None,
    password: str | None = None,
    dsn: str | None = None,
) -> psycopg2.extensions.connection:
    """Open a read-only, autocommit connection.

    A DSN wins over the individual arguments. Unset values fall back to the
    standard PG* environment variables handled by libpq.
    """
    if dsn:
        conn = psycopg2.connect(dsn, application_name=APPLICATION_NAME)
    else:
        params = {"application_name": APPLICATION_NAME}
        for key, value in (("host", host), ("port", port), ("dbname", dbname), ("user", user)):
            if value:
                params[key] = value
        if password:
            params["password"] = password
        elif os.environ.get("PGPASSWORD"):
            params["password"] = os.environ["PGPASSWORD"]
        conn = psycopg2.connect(**params)

    # Catalog reads only; never hold a transaction open between pulls.
    conn.set_session(readonly=True, autocommit=True)
    return conn


def get_pg_version(conn) -> str:
    with conn.cursor() as cur:
        cur.execute("SELECT version()")
        return cur.fetchone()[0]
