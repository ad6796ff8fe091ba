"""
CollisionDetector - Finds sequences shared by more than one column.

Pipeline:
1. SequenceScanner.find_sequence_columns: all nextval() columns in the schema
2. SequenceScanner.find_repeats: for each of them, the columns sharing its
   default expression (empty unless two or more do)
3. ScanResult: every non-empty group, in the order found

By default every discovered column is probed, so a sequence shared by
N columns is reported N times. ScanConfig.dedupe probes each distinct
default expression once instead.
"""

import logging
from typing import Optional, Callable

from ..config import ScanConfig
from ..discovery.sequences import SequenceScanner
from ..protocol.binding import ColumnBinding, ScanResult

logger = logging.getLogger(__name__)


class CollisionDetector:
    """Runs a sequence collision scan on one schema."""

    def __init__(self, connection, scanner: Optional[SequenceScanner] = None):
        self.conn = connection
        self.scanner = scanner or SequenceScanner(connection)
        self._on_progress: Optional[Callable[[ColumnBinding, int, int], None]] = None

    def on_progress(self, callback: Callable[[ColumnBinding, int, int], None]):
        """Register callback(probe, index, total) called before each probe."""
        self._on_progress = callback

    def run(self, config: ScanConfig) -> ScanResult:
        """
        Scan `config.schema` and collect every collision group.

        Any query or decode error propagates; nothing is returned for a
        scan that fails part way.
        """
        if not config.schema:
            raise ValueError("ScanConfig.schema is required")

        schema = config.schema
        result = ScanResult(schema=schema)

        usages = self.scanner.find_sequence_columns(schema)
        probes = self._distinct(usages) if config.dedupe else usages
        logger.info(
            "schema %s: %d sequence columns, %d probes%s",
            schema, len(usages), len(probes), " (dedupe)" if config.dedupe else "",
        )

        for i, probe in enumerate(probes):
            if self._on_progress:
                self._on_progress(probe, i, len(probes))
            result.add_group(self.scanner.find_repeats(probe, schema))

        logger.info("schema %s: %d colliding entries", schema, result.total)
        return result

    @staticmethod
    def _distinct(usages):
        """First binding for each distinct default expression, in order."""
        seen = set()
        probes = []
        for binding in usages:
            if binding.column_default in seen:
                continue
            seen.add(binding.column_default)
            probes.append(binding)
        return probes
