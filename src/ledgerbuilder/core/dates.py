#!/usr/bin/env python3
"""
LedgerDate Primitive Type

Immutable date wrapper for transaction headers. Accepts the date spellings
ledger files use (2020-01-10, 2020/01/10, 2020.01.10) and always writes ISO.
"""

from dataclasses import dataclass
from datetime import date, datetime

from .errors import InvalidDate

LEDGER_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d")


@dataclass(frozen=True, order=True)
class LedgerDate:
    """Immutable calendar date of a transaction."""

    date: date

    @classmethod
    def from_string(cls, date_str: str) -> "LedgerDate":
        """
        Parse a ledger header date.

        Args:
            date_str: Date string such as "2020-01-10" or "2020/01/10"

        Returns:
            LedgerDate object

        Raises:
            InvalidDate: If no supported format matches
        """
        text = date_str.strip()
        for date_format in LEDGER_DATE_FORMATS:
            try:
                return cls(date=datetime.strptime(text, date_format).date())
            except ValueError:
                continue
        raise InvalidDate(f"Invalid date: {date_str!r} (expected YYYY-MM-DD)")

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"LedgerDate(date={self.date!r})"
