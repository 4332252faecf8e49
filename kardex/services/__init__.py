"""
Kardex services: one module per rule engine.

Re-exports the service classes combined by the Warehouse facade:
    from kardex.services import FifoAllocation, MovementRules, StockReconciliation, KardexLedger
"""

from kardex.services.allocation import FifoAllocation
from kardex.services.ledger import KardexLedger
from kardex.services.movements import MovementRules
from kardex.services.reconciliation import StockReconciliation

__all__ = [
    'FifoAllocation',
    'MovementRules',
    'StockReconciliation',
    'KardexLedger',
]
