"""
Discovery module - Reads sequence usage from the catalog.

Components:
- SequenceScanner: finds nextval() columns and columns sharing a default
"""

from .sequences import SequenceScanner, quote_literal

__all__ = ["SequenceScanner", "quote_literal"]
