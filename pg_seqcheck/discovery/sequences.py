"""
SequenceScanner - Finds columns whose defaults come from a sequence.

Two catalog lookups:
- find_sequence_columns: every column in a schema defaulting to nextval(...)
- find_repeats: every column sharing one exact default expression,
  reduced to a collision group (empty unless two or more columns match)
"""

import logging
from typing import List, Optional, Sequence, Any

import psycopg2

from ..protocol.binding import ColumnBinding
from ..protocol.errors import QueryError, DecodeError

logger = logging.getLogger(__name__)


SEQUENCE_COLUMNS_QUERY = """
    SELECT table_name, column_name, column_default
    FROM information_schema.columns
    WHERE column_default LIKE 'nextval%%'
      AND table_schema = %s
"""

MATCHING_DEFAULT_QUERY = """
    SELECT table_name, column_name, column_default
    FROM information_schema.columns
    WHERE column_default = %s
      AND table_schema = %s
"""


def quote_literal(value: str) -> str:
    """Render a value as a SQL string literal, doubling single quotes."""
    return "'" + value.replace("'", "''") + "'"


class SequenceScanner:
    """
    Runs the sequence catalog queries on an open connection.

    The connection is only read from; queries run one at a time.
    """

    def __init__(self, connection):
        self.conn = connection

    def find_sequence_columns(self, schema: str) -> List[ColumnBinding]:
        """
        List every column in `schema` whose default is a nextval() call.

        Rows come back in catalog order.

        Raises:
            QueryError: the query failed
            DecodeError: a row could not be decoded
        """
        rows = self._fetch(SEQUENCE_COLUMNS_QUERY, (schema,))
        bindings = [self._decode(row) for row in rows]
        logger.debug("schema %s: %d sequence-backed columns", schema, len(bindings))
        return bindings

    def find_repeats(self, probe: ColumnBinding, schema: str) -> List[ColumnBinding]:
        """
        Collect every column in `schema` sharing the probe's default.

        The first row is held back until a second row shows up; from
        then on every row is kept. A default used by a single column
        therefore yields an empty list, and one used by N columns
        yields all N.
        """
        rows = self._fetch(MATCHING_DEFAULT_QUERY, (probe.column_default, schema))

        repeats: List[ColumnBinding] = []
        first: Optional[ColumnBinding] = None
        rows_count = 0

        for row in rows:
            rows_count += 1
            binding = self._decode(row)

            if rows_count == 1:
                first = binding
                continue

            if rows_count == 2:
                repeats.extend((first, binding))
                continue

            repeats.append(binding)

        if repeats:
            logger.debug(
                "%s.%s: %s shared by %d columns",
                probe.table_name, probe.column_name, probe.column_default, len(repeats),
            )
        return repeats

    def _fetch(self, query: str, params: tuple) -> List[Sequence[Any]]:
        """Execute a catalog query and return all rows."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("executing: %s", self._render(query, params))
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()
        except psycopg2.Error as e:
            raise QueryError.from_pg_error(e, failed_sql=self._render(query, params)) from e

    @staticmethod
    def _render(query: str, params: tuple) -> str:
        """Statement text with parameters inlined, for logs and error details."""
        text = query % tuple(quote_literal(str(p)) for p in params)
        return " ".join(text.split())

    @staticmethod
    def _decode(row: Sequence[Any]) -> ColumnBinding:
        try:
            return ColumnBinding.from_row(row)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"cannot decode catalog row {row!r}: {e}") from e
