"""
Kardex ledger: balances derived from approved movement history.

Pure functions over values: nothing here reads or writes storage. The
host loads movements, rebuilds balances, and pairs them with physical
counts before calling reconcile().
"""

import logging
from dataclasses import replace

from kardex.models.enums import MovementStatus, normalize
from kardex.models.records import Balance, Movement, ReconcileLine

logger = logging.getLogger('kardex')

# Balances are kept at 4 decimal places
QUANTITY_PRECISION = 4


class KardexLedger:
    """Balance rebuild from movements."""

    @classmethod
    def apply_approved_movement(cls, balances, movement) -> list[Balance]:
        """
        Apply one movement to a balance list, returning a new list.

        Non-APPROVED movements leave balances unchanged. A balance that
        drops to zero or below is removed; a line with no matching balance
        creates one only when it adds stock.
        """
        movement = Movement.coerce(movement)
        result = [Balance.coerce(b) for b in balances]

        if normalize(movement.status) != MovementStatus.APPROVED:
            return result

        for line in movement.lines:
            key = (movement.company_id, line.location_id, line.item_id, line.lot_id)
            idx = next((i for i, b in enumerate(result) if b.key == key), None)

            if idx is not None:
                quantity = round(result[idx].quantity + line.delta_qty, QUANTITY_PRECISION)
                if quantity <= 0:
                    del result[idx]
                else:
                    result[idx] = replace(
                        result[idx], quantity=quantity, updated_at=movement.created_at,
                    )
            elif line.delta_qty > 0:
                result.append(Balance(
                    company_id=movement.company_id,
                    location_id=line.location_id,
                    item_id=line.item_id,
                    lot_id=line.lot_id,
                    quantity=round(line.delta_qty, QUANTITY_PRECISION),
                    updated_at=movement.created_at,
                ))

        return result

    @classmethod
    def rebuild_balances(cls, movements) -> list[Balance]:
        """Replay APPROVED movements oldest first, starting from nothing."""
        approved = sorted(
            (m for m in map(Movement.coerce, movements)
             if normalize(m.status) == MovementStatus.APPROVED),
            key=lambda m: m.created_at,
        )

        balances: list[Balance] = []
        for movement in approved:
            balances = cls.apply_approved_movement(balances, movement)

        logger.info(
            "kardex.ledger.rebuild",
            extra={"movements": len(approved), "balances": len(balances)},
        )
        return balances

    @classmethod
    def pair_balances(cls, ledger, counted,
                      company_id: str | None = None) -> list[ReconcileLine]:
        """
        Join ledger balances with counted balances into reconcile lines.

        Keys are (company, location, item, lot). Ledger keys come first in
        ledger order, then keys only present in the count. A side with no
        balance for a key contributes 0.0.

        Args:
            ledger: Balances rebuilt from the kardex
            counted: Balances from a physical count
            company_id: Only pair balances of this company (None = all)
        """
        kardex_qty: dict[tuple, float] = {}
        balance_qty: dict[tuple, float] = {}

        for source, target in ((ledger, kardex_qty), (counted, balance_qty)):
            for balance in map(Balance.coerce, source):
                if company_id is not None and balance.company_id != company_id:
                    continue
                kardex_qty.setdefault(balance.key, 0.0)
                target[balance.key] = target.get(balance.key, 0.0) + balance.quantity

        return [
            ReconcileLine(
                company_id=key[0],
                location_id=key[1],
                item_id=key[2],
                lot_id=key[3],
                kardex_qty=kardex_qty[key],
                balance_qty=balance_qty.get(key, 0.0),
            )
            for key in kardex_qty
        ]
