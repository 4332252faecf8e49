"""
Kardex Protocols.

Defines interfaces for collaborators supplied by the host.
"""

from kardex.protocols.clock import Clock

__all__ = [
    "Clock",
]
