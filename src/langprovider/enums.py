"""Enumerations for langprovider type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class WalkStatus(StrEnum):
    """Outcome of walking a lookup path through a language document.

    StrEnum provides automatic string conversion: str(WalkStatus.FOUND) == "found"
    """

    FOUND = "found"
    """Path ends on a string leaf."""

    MISSING = "missing"
    """Unknown language, missing key, or non-object intermediate value."""

    NOT_A_STRING = "not_a_string"
    """Path ends on an object, array, number, boolean or null."""


__all__ = [
    "WalkStatus",
]
