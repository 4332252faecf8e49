"""
Kardex Clock Adapters: where "today" comes from.

Usage:
    from kardex.adapters import get_clock

    today = get_clock().today()

Settings:
    KARDEX = {
        "CLOCK": "kardex.adapters.clock.SystemClock",
    }

If CLOCK cannot be imported, get_clock() raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading
from datetime import date

from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.module_loading import import_string

from kardex.conf import kardex_settings
from kardex.protocols.clock import Clock

logger = logging.getLogger(__name__)


class SystemClock:
    """
    Current date from Django's clock.

    With USE_TZ=True this is the UTC date; otherwise the server's local date.
    """

    def today(self) -> date:
        return timezone.now().date()


class FixedClock:
    """Clock pinned to a given date."""

    def __init__(self, value: date):
        self.value = value

    def today(self) -> date:
        return self.value

    def __repr__(self) -> str:
        return f"FixedClock({self.value.isoformat()})"


# Cached clock instance
_lock = threading.Lock()
_clock: Clock | None = None


def get_clock() -> Clock:
    """
    Return the configured clock.

    Returns:
        Clock instance

    Raises:
        ImproperlyConfigured: If CLOCK is empty or import fails
    """
    global _clock

    if _clock is None:
        with _lock:
            if _clock is None:  # double-checked
                clock_path = kardex_settings.CLOCK

                if not clock_path:
                    raise ImproperlyConfigured(
                        "KARDEX['CLOCK'] must be configured. "
                        "Example: 'kardex.adapters.clock.SystemClock'"
                    )

                try:
                    clock_class = import_string(clock_path)
                    _clock = clock_class()
                    logger.debug("Loaded clock: %s", clock_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import clock '{clock_path}': {e}"
                    ) from e

    return _clock


def reset_clock() -> None:
    """Reset the cached clock. Useful for testing."""
    global _clock
    _clock = None
