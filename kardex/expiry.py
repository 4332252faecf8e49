"""
Expiry checks for lots.

Lot expiry dates travel as strings; only the first 10 characters
(YYYY-MM-DD) are trusted. A lot is expired when its expiry date is
strictly before today: a lot expiring today can still be issued.

Examples:
    - "2030-01-01T00:00:00Z" → date(2030, 1, 1)
    - expires 2026-10-19, today 2026-10-19 → not expired
    - expires 2026-10-18, today 2026-10-19 → expired
"""

from datetime import date, datetime, timedelta

from kardex.conf import kardex_settings
from kardex.exceptions import KardexError

DATE_FORMAT = '%Y-%m-%d'


def parse_expiry(value: str) -> date:
    """
    Parse a lot expiry string.

    Args:
        value: Date string; characters after the 10th are ignored

    Returns:
        The calendar date

    Raises:
        KardexError('INVALID_DATE'): If the prefix is not a valid YYYY-MM-DD date
    """
    if not isinstance(value, str):
        raise KardexError('INVALID_DATE', value=value)
    candidate = value[:10] if len(value) >= 10 else value
    try:
        return datetime.strptime(candidate, DATE_FORMAT).date()
    except ValueError:
        raise KardexError('INVALID_DATE', value=value) from None


def _parse_or_none(value: str) -> date | None:
    try:
        return parse_expiry(value)
    except KardexError:
        return None


def is_expired(expires_at: str, today: date) -> bool:
    """
    Check if a lot is past its expiry date.

    Unparsable dates are not considered expired.
    """
    expiry = _parse_or_none(expires_at)
    if expiry is None:
        return False
    return expiry < today


def is_near_expiry(expires_at: str, today: date, days: int | None = None) -> bool:
    """
    Check if a lot expires within the next ``days`` days.

    Already-expired lots count as near expiry.

    Args:
        expires_at: Lot expiry string
        today: Reference date
        days: Window in days (None = NEAR_EXPIRY_DAYS setting)
    """
    expiry = _parse_or_none(expires_at)
    if expiry is None:
        return False
    if days is None:
        days = kardex_settings.NEAR_EXPIRY_DAYS
    return expiry <= today + timedelta(days=days)


def expiring_lots(lots, today: date, days: int | None = None) -> list:
    """
    Filter lots to those near expiry, keeping input order.

    Args:
        lots: Iterable of objects with an ``expires_at`` string
        today: Reference date
        days: Window in days (None = NEAR_EXPIRY_DAYS setting)

    Returns:
        List of matching lots
    """
    if days is None:
        days = kardex_settings.NEAR_EXPIRY_DAYS
    return [lot for lot in lots if is_near_expiry(lot.expires_at, today, days)]
