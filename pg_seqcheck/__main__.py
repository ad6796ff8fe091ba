"""
Entry point for running pg_seqcheck as a module.

Usage:
    python -m pg_seqcheck -H localhost -d mydb -s public
"""

from .cli import main

if __name__ == "__main__":
    main()
