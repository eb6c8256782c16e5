"""Utility functions for meshdecode."""

from meshdecode.utils.logging import (
    setup_logging,
    get_logger,
    log_decode_result,
    StructuredLogger,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_decode_result",
    "StructuredLogger",
]
