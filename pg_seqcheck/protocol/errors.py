"""
Error Protocols - Failures that abort a sequence scan.

Every error carries ErrorDetails so the CLI can report what went wrong
(SQLSTATE code, hint, the SQL that failed) without knowing which stage
raised it.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Any
from enum import Enum
import json


class ErrorType(str, Enum):
    """Types of errors that can occur."""
    CONFIG = "CONFIG"
    CREDENTIALS = "CREDENTIALS"
    CONNECTION = "CONNECTION"
    QUERY = "QUERY"
    DECODE = "DECODE"


@dataclass
class ErrorDetails:
    """Details about an error."""
    message: str
    code: Optional[str] = None       # PostgreSQL SQLSTATE
    hint: Optional[str] = None
    failed_sql: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class SeqCheckError(Exception):
    """Base class for all fatal pg_seqcheck errors."""

    error_type = ErrorType.QUERY

    def __init__(self, message: str, details: Optional[ErrorDetails] = None):
        super().__init__(message)
        self.details = details or ErrorDetails(message=message)

    @classmethod
    def from_pg_error(cls, exc, failed_sql: Optional[str] = None) -> "SeqCheckError":
        """
        Wrap a psycopg2 error.

        Args:
            exc: The psycopg2.Error (or any exception) that was raised
            failed_sql: The statement that was being executed
        """
        message = (getattr(exc, "pgerror", None) or str(exc)).strip()
        diag = getattr(exc, "diag", None)
        details = ErrorDetails(
            message=message,
            code=getattr(exc, "pgcode", None),
            hint=getattr(diag, "message_hint", None) if diag is not None else None,
            failed_sql=failed_sql,
        )
        return cls(message, details)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error_type": self.error_type.value,
            "error_details": self.details.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


class ConfigError(SeqCheckError):
    """Config file missing, unreadable or invalid."""
    error_type = ErrorType.CONFIG


class CredentialError(SeqCheckError):
    """Credentials could not be obtained."""
    error_type = ErrorType.CREDENTIALS


class ConnectionFailed(SeqCheckError):
    """Database could not be opened or did not answer the ping."""
    error_type = ErrorType.CONNECTION


class QueryError(SeqCheckError):
    """A catalog query failed."""
    error_type = ErrorType.QUERY


class DecodeError(SeqCheckError):
    """A catalog row could not be turned into a ColumnBinding."""
    error_type = ErrorType.DECODE
