"""
Mock psycopg2 connection backed by an in-memory information_schema.

Understands the statements pg_seqcheck sends:
- SELECT 1
- the nextval LIKE query (param: schema)
- the column_default equality query (params: default, schema)

Anything else raises psycopg2.ProgrammingError so unexpected SQL
shows up as a test failure.
"""

from typing import Callable, List, Optional, Sequence, Tuple, Any

import psycopg2

from .golden_data import CatalogColumn


class MockCursor:
    """Cursor returned by MockConnection.cursor()."""

    def __init__(self, conn: "MockConnection"):
        self.conn = conn
        self._rows: List[Tuple[Any, ...]] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, query: str, params: Optional[Sequence[Any]] = None):
        params = tuple(params or ())
        normalized = " ".join(query.split())
        self.conn.executed.append((normalized, params))

        # psycopg2 requires %% for a literal percent when params are given
        placeholders = normalized.replace("%%", "").count("%s")
        if placeholders != len(params):
            raise psycopg2.ProgrammingError(
                f"{placeholders} placeholders for {len(params)} params"
            )

        if self.conn.fail_on_call == len(self.conn.executed):
            raise self.conn.error

        if normalized == "SELECT 1":
            self._rows = [(1,)]
        elif "column_default LIKE 'nextval%%'" in normalized:
            (schema,) = params
            self._rows = self.conn.select(
                lambda c: c.table_schema == schema
                and c.column_default is not None
                and c.column_default.startswith("nextval")
            )
        elif "column_default = %s" in normalized:
            default, schema = params
            self._rows = self.conn.select(
                lambda c: c.table_schema == schema and c.column_default == default
            )
        else:
            raise psycopg2.ProgrammingError(f"unexpected query: {normalized}")

    def fetchall(self) -> List[Tuple[Any, ...]]:
        return list(self._rows)

    def fetchone(self) -> Optional[Tuple[Any, ...]]:
        return self._rows[0] if self._rows else None


class MockConnection:
    """
    Stand-in for a psycopg2 connection.

    Usage:
        conn = MockConnection(REUSED_SEQUENCE)
        conn.fail_on_call = 2          # second execute() raises conn.error
        conn.transform_row = lambda r: r[:2]   # corrupt rows
    """

    def __init__(self, catalog: List[CatalogColumn]):
        self.catalog = list(catalog)
        self.executed: List[Tuple[str, Tuple[Any, ...]]] = []
        self.fail_on_call: Optional[int] = None
        self.error: Exception = psycopg2.OperationalError(
            "server closed the connection unexpectedly"
        )
        self.transform_row: Optional[Callable[[Tuple[Any, ...]], Tuple[Any, ...]]] = None
        self.closed = False
        self.autocommit = False

    def cursor(self) -> MockCursor:
        if self.closed:
            raise psycopg2.InterfaceError("connection already closed")
        return MockCursor(self)

    def close(self):
        self.closed = True

    def select(self, predicate) -> List[Tuple[Any, ...]]:
        rows = [
            (c.table_name, c.column_name, c.column_default)
            for c in self.catalog
            if predicate(c)
        ]
        if self.transform_row:
            rows = [self.transform_row(r) for r in rows]
        return rows

    def queries_matching(self, fragment: str) -> List[Tuple[str, Tuple[Any, ...]]]:
        """Executed statements containing `fragment`."""
        return [(q, p) for q, p in self.executed if fragment in q]
