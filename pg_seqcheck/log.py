"""
Logging helper.

Diagnostics go to stderr so stdout only ever carries the report.
"""

import logging
import sys


_DEF_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_logger(name: str = "pg_seqcheck", level: int = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_DEF_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
