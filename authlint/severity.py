"""Severity definitions for analyzer findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    HIDDEN = "HIDDEN"

    @property
    def rank(self) -> int:
        """Return an integer ranking to drive exit code decisions."""

        ordering = {
            Severity.ERROR: 3,
            Severity.WARNING: 2,
            Severity.INFO: 1,
            Severity.HIDDEN: 0,
        }
        return ordering[self]

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Look up a severity by case-insensitive name."""

        try:
            return cls(str(value).upper())
        except ValueError:
            choices = ", ".join(member.value.lower() for member in cls)
            raise ValueError(f"Unknown severity {value!r}; expected one of: {choices}") from None
