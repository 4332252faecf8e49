"""
Warehouse Service: The single public interface for inventory rules.

Usage:
    from kardex import warehouse, KardexError

    result = warehouse.allocate(12, 'ITEM-1', 'LOC-1', lots)
    warehouse.validate_movement({'movementType': 'ADJUST', ...})
    warehouse.reconcile(lines, tolerance=0.001)
"""

from datetime import date

from kardex.adapters.clock import get_clock
from kardex.expiry import expiring_lots
from kardex.exceptions import KardexError
from kardex.models.records import Lot, pick, pick_flag, pick_items, pick_number
from kardex.services import (
    FifoAllocation,
    KardexLedger,
    MovementRules,
    StockReconciliation,
)


def _as_payload(payload) -> dict:
    if not isinstance(payload, dict):
        raise KardexError('INVALID_RECORD', record='payload', value=payload)
    return payload


class Warehouse(FifoAllocation, MovementRules, StockReconciliation, KardexLedger):
    """
    Single interface for all inventory rule engines.

    Every method is stateless: records (or plain wire dicts) in, a fresh
    result out, KardexError on any rule violation. Safe to call from
    concurrent requests.
    """

    @classmethod
    def allocate_request(cls, payload: dict, clock=None):
        """
        Allocate from a wire payload.

        Payload keys: requestedQty, itemId, locationId, lots,
        allowExpired (boolean, default False), reason (optional).
        """
        payload = _as_payload(payload)
        return cls.allocate(
            pick_number(payload, 'requested_qty'),
            pick(payload, 'item_id'),
            pick(payload, 'location_id'),
            pick_items(payload, 'lots'),
            allow_expired=pick_flag(payload, 'allow_expired', False),
            reason=pick(payload, 'reason', None),
            clock=clock,
        )

    @classmethod
    def reconcile_request(cls, payload: dict):
        """Reconcile from a wire payload: {"lines": [...], "tolerance": T}."""
        payload = _as_payload(payload)
        return cls.reconcile(pick_items(payload, 'lines'), pick_number(payload, 'tolerance', None))

    @classmethod
    def expiring_lots(cls, lots, days: int | None = None,
                      today: date | None = None, clock=None) -> list[Lot]:
        """
        Lots expiring within ``days`` (already expired included).

        Args:
            lots: Lot records (or wire dicts)
            days: Window (None = NEAR_EXPIRY_DAYS setting)
            today: Reference date (None = clock)
            clock: Clock override (None = configured clock)
        """
        if today is None:
            today = (clock or get_clock()).today()
        lots = [Lot.coerce(lot) for lot in lots]
        return expiring_lots(lots, today, days)
