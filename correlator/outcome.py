"""Normalized outcome definitions for observations."""

from __future__ import annotations

from enum import Enum


class Result(str, Enum):
    """Enumerate the normalized outcomes an observation can carry."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    INVALID = "invalid"

    @property
    def exit_priority(self) -> int:
        """Return an integer ranking to drive exit code decisions."""

        ordering = {
            Result.INVALID: 2,
            Result.FAIL: 2,
            Result.ERROR: 1,
            Result.PASS: 0,
        }
        return ordering[self]
