"""
Exceptions for Kardex.

All rule failures are KardexError with a structured code. The message is
what hosts display; the code is for logs and programmatic handling.
"""

from typing import Any


class BaseError(Exception):
    """
    Error carrying a code, a human-readable message and context data.

    Subclasses declare ``_default_messages`` keyed by code. Context passed
    as keyword arguments is kept in ``data`` and may be interpolated into
    the default message with ``str.format`` fields.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.data = data
        if message is None:
            template = self._default_messages.get(code, code)
            message = template.format(**data) if data else template
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class KardexError(BaseError):
    """
    Structured exception for inventory rule engines.

    Usage:
        try:
            warehouse.allocate(12, 'ITEM-1', 'LOC-1', lots)
        except KardexError as e:
            if e.code == 'REASON_REQUIRED':
                ask_for_reason()
            show(str(e))

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        # Allocation
        'INVALID_QUANTITY': 'Requested quantity must be greater than zero',
        'INVALID_DATE': 'Invalid date format: {value}',
        'NO_STOCK': 'No stock available for FIFO allocation in selected location',
        'ALL_EXPIRED': (
            "All available stock is expired. "
            "Enable allow_expired and register motive '{motive}'"
        ),
        'EXPIRED_CONFIRMATION_REQUIRED': (
            "Expired lots are required to complete FIFO allocation. "
            "Confirmation is required with motive '{motive}'"
        ),
        'REASON_REQUIRED': 'Reason is required when using expired lots',
        'INSUFFICIENT_STOCK': 'Insufficient non-expired stock for requested quantity',
        # Movements
        'INVALID_MOVEMENT_TYPE': 'Invalid movement_type',
        'INVALID_STATUS': 'Invalid status',
        'INVALID_ROLE': 'Invalid requested_by_role',
        'MOTIVE_REQUIRED': 'Motive is required for ADJUST and SCRAP',
        'MUST_START_PENDING': 'ADJUST and SCRAP must start as PENDING',
        'WORK_ORDER_REQUIRED': 'OUT_OT requires an associated work order',
        'NOT_PENDING': 'Only PENDING movements can change status',
        'INVALID_TRANSITION': 'New status must be APPROVED or REJECTED',
        'APPROVER_REQUIRED': 'Approver role is required for PENDING transitions',
        'APPROVER_NOT_ALLOWED': (
            'Only Supervisor/Admin/SuperAdmin can approve or reject pending movements'
        ),
        # Reconciliation
        'INVALID_TOLERANCE': 'Tolerance must be zero or positive',
        # Wire payloads
        'INVALID_PAYLOAD': 'Missing or null field: {field}',
        'INVALID_NUMBER': 'Field {field} must be a number, got {value!r}',
        'INVALID_FLAG': 'Field {field} must be true or false, got {value!r}',
        'INVALID_LIST': 'Field {field} must be a list',
        'INVALID_RECORD': 'Expected {record} object, got {value!r}',
    }

    @property
    def requested(self) -> float:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0.0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if not isinstance(v, (int, float, bool, type(None))) else v
                for k, v in self.data.items()
            },
        }
