"""
pg_seqcheck - PostgreSQL sequence collision finder

Reports sequences bound to more than one column through nextval()
defaults, usually a sign that a sequence was reused by copy-paste
instead of created per table.

Usage:
    # As a module
    python -m pg_seqcheck -H localhost -d mydb -s public

    # Programmatically
    from pg_seqcheck import CollisionDetector, ScanConfig, render_report

    detector = CollisionDetector(conn)
    result = detector.run(ScanConfig(schema="public"))
    print(render_report(result))
"""

__version__ = "1.0.0"

# Main exports
from .config import Config, DatabaseConfig, ScanConfig
from .runner.detector import CollisionDetector
from .discovery.sequences import SequenceScanner
from .report import render_report, render_json

# Protocol exports
from .protocol.binding import ColumnBinding, ScanResult
from .protocol.errors import SeqCheckError

__all__ = [
    # Version
    "__version__",
    # Config
    "Config",
    "DatabaseConfig",
    "ScanConfig",
    # Scan
    "CollisionDetector",
    "SequenceScanner",
    "render_report",
    "render_json",
    # Protocol
    "ColumnBinding",
    "ScanResult",
    "SeqCheckError",
]
