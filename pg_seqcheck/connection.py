"""
PostgreSQL connection handling.
"""

import logging

import psycopg2

from .config import DatabaseConfig
from .protocol.errors import ConnectionFailed

logger = logging.getLogger(__name__)


def create_connection(database: DatabaseConfig):
    """
    Open a psycopg2 connection and make sure the server answers.

    The connect attempt is bounded by `database.connect_timeout`.

    Raises:
        ConnectionFailed: connect or ping failed
    """
    logger.debug("connecting to %s", database.dsn_summary())
    try:
        conn = psycopg2.connect(**database.connection_kwargs())
    except psycopg2.Error as e:
        raise ConnectionFailed.from_pg_error(e) from e

    # Catalog reads only; no transaction left open between queries
    conn.autocommit = True

    try:
        ping(conn)
    except psycopg2.Error as e:
        conn.close()
        raise ConnectionFailed.from_pg_error(e, failed_sql="SELECT 1") from e

    return conn


def ping(conn) -> None:
    """Round-trip a trivial query."""
    with conn.cursor() as cur:
        cur.execute("SELECT 1")
        cur.fetchone()
