"""
Protocol definitions for pg_seqcheck.

- ColumnBinding: a column and its sequence-backed default expression
- ScanResult: collision groups collected during one scan
- SeqCheckError and subclasses: fatal errors, one per failure stage
"""

from .binding import ColumnBinding, ScanResult
from .errors import (
    ErrorType,
    ErrorDetails,
    SeqCheckError,
    ConfigError,
    CredentialError,
    ConnectionFailed,
    QueryError,
    DecodeError,
)

__all__ = [
    "ColumnBinding",
    "ScanResult",
    "ErrorType",
    "ErrorDetails",
    "SeqCheckError",
    "ConfigError",
    "CredentialError",
    "ConnectionFailed",
    "QueryError",
    "DecodeError",
]
