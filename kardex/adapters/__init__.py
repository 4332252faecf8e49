"""
Kardex Adapters.

Implementations of protocols for host-supplied collaborators.
"""

from kardex.adapters.clock import FixedClock, SystemClock, get_clock, reset_clock

__all__ = [
    "FixedClock",
    "SystemClock",
    "get_clock",
    "reset_clock",
]
