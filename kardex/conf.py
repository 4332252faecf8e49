"""
Kardex configuration.

Usage in settings.py:
    KARDEX = {
        "CLOCK": "kardex.adapters.clock.SystemClock",
        "EXPIRED_LOT_MOTIVE": "Uso de lote vencido",
        "RECONCILE_TOLERANCE": 0.000001,
        "NEAR_EXPIRY_DAYS": 30,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class KardexSettings:
    """Kardex configuration settings."""

    # Source of "today" for expiry classification (dotted path)
    CLOCK: str = "kardex.adapters.clock.SystemClock"

    # Motive callers must register to draw from expired lots
    EXPIRED_LOT_MOTIVE: str = "Uso de lote vencido"

    # Default absolute tolerance for stock reconciliation
    RECONCILE_TOLERANCE: float = 0.000_001

    # Window (days) for near-expiry listings
    NEAR_EXPIRY_DAYS: int = 30


def get_kardex_settings() -> KardexSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "KARDEX", {})
    return KardexSettings(**{
        k: v for k, v in user_settings.items()
        if k in KardexSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_kardex_settings(), name)


kardex_settings = _LazySettings()
