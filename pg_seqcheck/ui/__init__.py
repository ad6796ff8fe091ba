"""
UI module - Rich console interface.

Provides:
- Banner and status output (stderr)
- Report output (stdout)
- Probe progress display
"""

from .console import ConsoleUI

__all__ = ["ConsoleUI"]
