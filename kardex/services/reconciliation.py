"""
Stock reconciliation: kardex (ledger) quantities vs physical counts.

Each line stands alone: delta = balance_qty - kardex_qty, and the line is
a mismatch when |delta| > tolerance. Mismatches keep input order.
"""

import logging

from kardex.conf import kardex_settings
from kardex.exceptions import KardexError
from kardex.models.records import Mismatch, ReconcileLine, ReconcileResult

logger = logging.getLogger('kardex')


class StockReconciliation:
    """Ledger vs count comparison."""

    @classmethod
    def reconcile(cls, lines, tolerance: float | None = None) -> ReconcileResult:
        """
        Flag lines whose discrepancy exceeds the tolerance.

        Args:
            lines: ReconcileLine records (or wire dicts)
            tolerance: Max accepted |delta| (None = RECONCILE_TOLERANCE setting)

        Returns:
            ReconcileResult; balanced iff no mismatches

        Raises:
            KardexError('INVALID_TOLERANCE'): tolerance < 0 or NaN
        """
        if tolerance is None:
            tolerance = kardex_settings.RECONCILE_TOLERANCE
        if not tolerance >= 0:
            raise KardexError('INVALID_TOLERANCE', tolerance=tolerance)

        checked = 0
        mismatches = []
        for line in lines:
            line = ReconcileLine.coerce(line)
            checked += 1
            delta = line.balance_qty - line.kardex_qty
            if abs(delta) > tolerance:
                mismatches.append(Mismatch(
                    company_id=line.company_id,
                    location_id=line.location_id,
                    item_id=line.item_id,
                    lot_id=line.lot_id,
                    kardex_qty=line.kardex_qty,
                    balance_qty=line.balance_qty,
                    delta=delta,
                ))
                logger.warning(
                    "kardex.reconcile.mismatch",
                    extra={
                        "company_id": line.company_id,
                        "location_id": line.location_id,
                        "item_id": line.item_id,
                        "lot_id": line.lot_id,
                        "delta": delta,
                    },
                )

        logger.info(
            "kardex.reconcile",
            extra={
                "checked_lines": checked,
                "mismatch_count": len(mismatches),
                "tolerance": tolerance,
            },
        )
        return ReconcileResult(
            balanced=not mismatches,
            checked_lines=checked,
            mismatch_count=len(mismatches),
            mismatches=tuple(mismatches),
        )
