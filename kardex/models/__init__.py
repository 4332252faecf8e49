"""
Kardex Models.

No database tables: the rule engines work on values handed over by the
host. This package holds the closed enumerations and the records:
- Enums: MovementType, MovementStatus, Role, WorkOrderStatus
- Allocation: Lot, AllocationLine, AllocationResult
- Validation: MovementRequest, ValidationResult
- Reconciliation: ReconcileLine, Mismatch, ReconcileResult
- Ledger: Movement, MovementLine, Balance
"""

from kardex.models.enums import (
    APPROVER_ROLES,
    MOTIVE_REQUIRED_TYPES,
    OPEN_WORK_ORDER_STATUSES,
    MovementStatus,
    MovementType,
    Role,
    WorkOrderStatus,
)
from kardex.models.records import (
    AllocationLine,
    AllocationResult,
    Balance,
    Lot,
    Mismatch,
    Movement,
    MovementLine,
    MovementRequest,
    ReconcileLine,
    ReconcileResult,
    ValidationResult,
)

__all__ = [
    'MovementType',
    'MovementStatus',
    'Role',
    'WorkOrderStatus',
    'APPROVER_ROLES',
    'MOTIVE_REQUIRED_TYPES',
    'OPEN_WORK_ORDER_STATUSES',
    'Lot',
    'AllocationLine',
    'AllocationResult',
    'MovementRequest',
    'ValidationResult',
    'ReconcileLine',
    'Mismatch',
    'ReconcileResult',
    'Movement',
    'MovementLine',
    'Balance',
]
