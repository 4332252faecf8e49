"""
Clock Protocol: source of "today" for expiry classification.

The allocator never reads the system date directly; it asks a Clock, so
hosts can pin the business date and tests can freeze it.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """
    Protocol for the current business date.

    Implementations:
        - SystemClock: Django's timezone.now() date
        - FixedClock: Pinned date, for tests and replays
    """

    def today(self) -> date:
        """
        Return the current business date.

        Returns:
            Calendar date used to decide whether a lot is expired
        """
        ...
