"""
FIFO allocation: which lots an outgoing movement draws from.

Lots are drawn earliest-expiry first. Non-expired stock is always used
before expired stock; expired lots are only touched when the caller
explicitly allows it and registers a reason.
"""

import logging
from datetime import date

from kardex.adapters.clock import get_clock
from kardex.conf import kardex_settings
from kardex.exceptions import KardexError
from kardex.expiry import parse_expiry
from kardex.models.records import AllocationLine, AllocationResult, Lot

logger = logging.getLogger('kardex')

WARNING_ALL_EXPIRED = 'Todos los lotes disponibles se encuentran vencidos'
WARNING_EXPIRED_USED = 'Se utilizaron lotes vencidos para completar la salida'


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


class FifoAllocation:
    """First-expired-first-out lot allocation."""

    @classmethod
    def allocate(cls, requested_qty: float, item_id: str, location_id: str,
                 lots, allow_expired: bool = False, reason: str | None = None,
                 clock=None) -> AllocationResult:
        """
        Select lots (and amounts) to satisfy an outgoing quantity.

        Partial fulfillment is a normal result: check ``missing_qty``.

        Args:
            requested_qty: Quantity to issue (> 0)
            item_id: Only lots of this item are considered
            location_id: Only lots at this location are considered
            lots: Candidate Lot records (or wire dicts); never mutated
            allow_expired: Caller confirmed expired lots may be used
            reason: Motive registered for using expired lots
            clock: Clock override (None = configured clock)

        Returns:
            AllocationResult with lines in draw order

        Raises:
            KardexError('INVALID_QUANTITY'): requested_qty <= 0
            KardexError('INVALID_DATE'): a matching lot has a bad expiry date
            KardexError('NO_STOCK'): no matching lot with stock
            KardexError('ALL_EXPIRED'): only expired stock, not allowed
            KardexError('EXPIRED_CONFIRMATION_REQUIRED'): expired stock needed, not allowed
            KardexError('REASON_REQUIRED'): expired stock allowed but no reason
            KardexError('INSUFFICIENT_STOCK'): non-expired short, nothing expired to add
        """
        if requested_qty <= 0:
            raise KardexError('INVALID_QUANTITY', requested=requested_qty)

        # Read once: a lot must not change class mid-call
        today = (clock or get_clock()).today()
        non_expired, expired = cls._partition(lots, item_id, location_id, today)

        if not non_expired and not expired:
            raise KardexError('NO_STOCK', item_id=item_id, location_id=location_id)

        warnings = []
        if not non_expired:
            cls._require_expired_confirmation('ALL_EXPIRED', allow_expired, reason)
            warnings.append(WARNING_ALL_EXPIRED)
            pool = [(lot, True) for lot in expired]
        else:
            pool = [(lot, False) for lot in non_expired]
            non_expired_total = sum(lot.available_qty for lot in non_expired)
            if non_expired_total < requested_qty:
                if not expired:
                    raise KardexError(
                        'INSUFFICIENT_STOCK',
                        requested=requested_qty,
                        available=non_expired_total,
                    )
                cls._require_expired_confirmation(
                    'EXPIRED_CONFIRMATION_REQUIRED', allow_expired, reason,
                )
                warnings.append(WARNING_EXPIRED_USED)
                pool.extend((lot, True) for lot in expired)

        remaining = requested_qty
        allocations = []
        for lot, lot_expired in pool:
            if remaining <= 0:
                break
            take = min(remaining, lot.available_qty)
            if take <= 0:
                continue
            allocations.append(AllocationLine(
                lot_id=lot.lot_id,
                qty=take,
                expires_at=lot.expires_at,
                is_expired=lot_expired,
            ))
            remaining -= take

        missing_qty = max(remaining, 0.0)
        result = AllocationResult(
            allocations=tuple(allocations),
            fulfilled_qty=requested_qty - missing_qty,
            missing_qty=missing_qty,
            used_expired=any(line.is_expired for line in allocations),
            warnings=tuple(warnings),
        )

        logger.info(
            "kardex.allocate",
            extra={
                "item_id": item_id,
                "location_id": location_id,
                "requested": requested_qty,
                "fulfilled": result.fulfilled_qty,
                "missing": result.missing_qty,
                "lots": [line.lot_id for line in allocations],
            },
        )
        if result.used_expired:
            logger.warning(
                "kardex.allocate.expired",
                extra={
                    "item_id": item_id,
                    "location_id": location_id,
                    "reason": reason,
                    "lots": [line.lot_id for line in allocations if line.is_expired],
                },
            )
        return result

    @classmethod
    def _partition(cls, lots, item_id: str, location_id: str,
                   today: date) -> tuple[list[Lot], list[Lot]]:
        """
        Keep matching lots with stock, split by expiry, sort each side.

        Sort key is (expiry date, lot_id) so ties are deterministic.
        """
        non_expired, expired = [], []
        for lot in lots:
            lot = Lot.coerce(lot)
            if (lot.item_id != item_id or lot.location_id != location_id
                    or lot.available_qty <= 0):
                continue
            expiry = parse_expiry(lot.expires_at)
            (expired if expiry < today else non_expired).append((expiry, lot))

        def order(entries):
            entries.sort(key=lambda entry: (entry[0], entry[1].lot_id))
            return [lot for _, lot in entries]

        return order(non_expired), order(expired)

    @classmethod
    def _require_expired_confirmation(cls, code: str, allow_expired: bool,
                                      reason: str | None) -> None:
        motive = kardex_settings.EXPIRED_LOT_MOTIVE
        if not allow_expired:
            logger.debug("kardex.allocate.rejected", extra={"code": code})
            raise KardexError(code, motive=motive)
        if not _has_text(reason):
            logger.debug("kardex.allocate.rejected", extra={"code": 'REASON_REQUIRED'})
            raise KardexError('REASON_REQUIRED', motive=motive)
