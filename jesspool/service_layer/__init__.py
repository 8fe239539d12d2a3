"""
Service layer for spool operations.

This package contains the JES client and the protocols it builds on:
waiting for job status changes and guarding against truncated listings.
"""

from .jes_client import LIST_LIMIT_MAX, JesClient
from .limits import list_name_results, throw_if_limit_reached
from .waiting import Stopwatch, wait_for_status

__all__ = [
    "LIST_LIMIT_MAX",
    "JesClient",
    "Stopwatch",
    "list_name_results",
    "throw_if_limit_reached",
    "wait_for_status",
]
