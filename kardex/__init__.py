"""
Django Kardex: Reglas de integridad de inventario.

FIFO allocation by expiry, movement approval rules and stock
reconciliation for a warehouse kardex.

Uso:
    from kardex import warehouse, KardexError

    warehouse.allocate(12, 'ITEM-1', 'LOC-1', lots)
    warehouse.validate_movement(request)
    warehouse.reconcile(lines)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'warehouse':
        from kardex.service import Warehouse
        return Warehouse
    elif name == 'KardexError':
        from kardex.exceptions import KardexError
        return KardexError
    elif name == 'MovementType':
        from kardex.models.enums import MovementType
        return MovementType
    elif name == 'MovementStatus':
        from kardex.models.enums import MovementStatus
        return MovementStatus
    elif name == 'Role':
        from kardex.models.enums import Role
        return Role
    elif name == 'Lot':
        from kardex.models.records import Lot
        return Lot
    elif name == 'MovementRequest':
        from kardex.models.records import MovementRequest
        return MovementRequest
    elif name == 'ReconcileLine':
        from kardex.models.records import ReconcileLine
        return ReconcileLine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'warehouse',
    'KardexError',
    'MovementType',
    'MovementStatus',
    'Role',
    'Lot',
    'MovementRequest',
    'ReconcileLine',
]

__version__ = '0.1.0'
