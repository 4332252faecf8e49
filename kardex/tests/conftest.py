"""
Pytest fixtures for Kardex tests.
"""

from datetime import date, timedelta

import pytest

from kardex.adapters.clock import FixedClock, reset_clock
from kardex.models import Lot, MovementRequest, ReconcileLine


TODAY = date(2026, 3, 15)


@pytest.fixture(autouse=True)
def _fresh_clock():
    """Drop the cached clock so settings overrides take effect."""
    reset_clock()
    yield
    reset_clock()


@pytest.fixture
def today():
    """Pinned business date."""
    return TODAY


@pytest.fixture
def clock(today):
    """Clock frozen at ``today``."""
    return FixedClock(today)


@pytest.fixture
def make_lot(today):
    """Factory for lots of ITEM-1 at LOC-1; expiry given in days from today."""
    def _make(lot_id, qty, days=30, item_id='ITEM-1', location_id='LOC-1', expires_at=None):
        if expires_at is None:
            expires_at = (today + timedelta(days=days)).isoformat()
        return Lot(
            lot_id=lot_id,
            item_id=item_id,
            location_id=location_id,
            expires_at=expires_at,
            available_qty=qty,
        )
    return _make


@pytest.fixture
def make_request():
    """Factory for movement requests with sensible defaults."""
    def _make(**overrides):
        data = {
            'movement_type': 'IN',
            'status': 'PENDING',
            'requested_by_role': 'BODEGUERO',
        }
        data.update(overrides)
        return MovementRequest(**data)
    return _make


@pytest.fixture
def make_line():
    """Factory for reconcile lines at COMP-1/LOC-1."""
    def _make(item_id, kardex_qty, balance_qty, lot_id=None, location_id='LOC-1'):
        return ReconcileLine(
            company_id='COMP-1',
            location_id=location_id,
            item_id=item_id,
            lot_id=lot_id,
            kardex_qty=kardex_qty,
            balance_qty=balance_qty,
        )
    return _make
