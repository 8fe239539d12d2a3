"""Interpretation of the server reply following a listing."""

import re
from typing import List, Optional

from ..domain import Job
from ..errors import LimitReachedError

PATTERN_LIST_LIMIT = re.compile(
    r"^250-JESENTRYLIMIT OF \d+ REACHED\.  ADDITIONAL ENTRIES NOT DISPLAYED\r?$",
    re.MULTILINE)

PATTERN_LIST_NAMES_NO_JOBS_FOUND = re.compile(r"^550 NO JOBS FOUND FOR ")


def throw_if_limit_reached(reply: str, limit: int, jobs: List[Job]) -> List[Job]:
    """
    Return ``jobs`` unless ``reply`` reports a truncated listing.

    Raises:
        LimitReachedError: carrying ``limit`` and ``jobs``
    """
    if PATTERN_LIST_LIMIT.search(reply or ""):
        raise LimitReachedError(limit, jobs, reply)
    return jobs


def list_name_results(names: Optional[List[str]], reply: str) -> Optional[List[str]]:
    """
    Translate the "no jobs found" reply of a name listing to an empty list.

    Returns None if the listing failed for any other reason.
    """
    if names is None:
        if PATTERN_LIST_NAMES_NO_JOBS_FOUND.search(reply or ""):
            return []
        return None
    return names
