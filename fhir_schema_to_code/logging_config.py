"""
Logging setup for the command line tool.
"""

import sys

from loguru import logger

_logging_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the global loguru logger with a single stderr sink.

    Only the first call has an effect so repeated invocations (tests, nested
    commands) do not stack handlers.

    Args:
        level: Minimum level to emit (default: INFO)
    """
    global _logging_configured

    if _logging_configured:
        return
    _logging_configured = True

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )
