"""Normalization of textual job fields."""

from typing import Optional


def normalize(value: str) -> str:
    """Return ``value`` trimmed and upper-cased."""
    return value.strip().upper()


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """
    Normalize an optional structural field.

    An empty but present value stays empty, so that the owning model can
    reject it instead of silently dropping it.
    """
    if value is None:
        return None
    return normalize(value)


def non_blank(value: Optional[str]) -> Optional[str]:
    """Normalize an optional filter-like field, collapsing blank to None."""
    if value is None:
        return None
    value = normalize(value)
    return value if value else None
