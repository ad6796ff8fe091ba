"""
Mock components for testing pg_seqcheck.

MockConnection answers the catalog queries from golden_data.py so the
scanner, detector and CLI can be exercised without a PostgreSQL server.
"""

from .golden_data import (
    CatalogColumn,
    CATALOGS,
    REUSED_SEQUENCE,
    TRIPLE_SEQUENCE,
    NO_COLLISIONS,
    NO_SEQUENCES,
    INTERLEAVED,
    QUOTED_SEQUENCE,
    CROSS_SCHEMA,
    nextval,
)
from .mock_catalog import MockConnection, MockCursor

__all__ = [
    'MockConnection',
    'MockCursor',
    'CatalogColumn',
    'CATALOGS',
    'REUSED_SEQUENCE',
    'TRIPLE_SEQUENCE',
    'NO_COLLISIONS',
    'NO_SEQUENCES',
    'INTERLEAVED',
    'QUOTED_SEQUENCE',
    'CROSS_SCHEMA',
    'nextval',
]
