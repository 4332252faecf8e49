"""
Records exchanged with the rule engines.

Plain immutable values: hosts deserialize their payloads into these
(``from_dict`` accepts the camelCase keys used on the wire as well as
snake_case), and results serialize back with ``as_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from kardex.exceptions import KardexError

_MISSING = object()


def _camel(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


def pick(data: dict[str, Any], name: str, default: Any = _MISSING) -> Any:
    """
    Read ``name`` from a payload in snake_case or camelCase.

    Without a default, a missing or null value raises
    KardexError('INVALID_PAYLOAD').
    """
    camel = _camel(name)
    if name in data:
        value = data[name]
    elif camel in data:
        value = data[camel]
    else:
        value = None
    if value is None:
        if default is _MISSING:
            raise KardexError('INVALID_PAYLOAD', field=camel)
        return default
    return value


def pick_number(data: dict[str, Any], name: str, default: Any = _MISSING) -> Any:
    """Read a numeric field as float."""
    value = pick(data, name, default)
    if value is default:
        return value
    if isinstance(value, bool):
        raise KardexError('INVALID_NUMBER', field=_camel(name), value=value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise KardexError('INVALID_NUMBER', field=_camel(name), value=value) from None


def pick_flag(data: dict[str, Any], name: str, default: Any = _MISSING) -> Any:
    """Read a boolean field. Strings such as "false" are rejected."""
    value = pick(data, name, default)
    if value is default or isinstance(value, bool):
        return value
    raise KardexError('INVALID_FLAG', field=_camel(name), value=value)


def pick_items(data: dict[str, Any], name: str) -> list | tuple:
    """Read an optional list field (missing = empty)."""
    value = pick(data, name, ())
    if not isinstance(value, (list, tuple)):
        raise KardexError('INVALID_LIST', field=_camel(name))
    return value


def _dump(value: Any) -> Any:
    if isinstance(value, Record):
        return value.as_dict()
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    if isinstance(value, str):
        # TextChoices members serialize as their plain value
        return str(value)
    return value


class Record:
    """Mixin for dataclass records: camelCase serialization."""

    def as_dict(self) -> dict[str, Any]:
        return {_camel(f.name): _dump(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def coerce(cls, value):
        """Accept a record of this type or its wire dict."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls.from_dict(value)
        raise KardexError('INVALID_RECORD', record=cls.__name__, value=value)


# ══════════════════════════════════════════════════════════════
# FIFO ALLOCATION
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Lot(Record):
    """Candidate lot for an outgoing movement."""

    lot_id: str
    item_id: str
    location_id: str
    expires_at: str  # YYYY-MM-DD prefixed
    available_qty: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Lot:
        return cls(
            lot_id=pick(data, 'lot_id'),
            item_id=pick(data, 'item_id'),
            location_id=pick(data, 'location_id'),
            expires_at=pick(data, 'expires_at'),
            available_qty=pick_number(data, 'available_qty'),
        )


@dataclass(frozen=True)
class AllocationLine(Record):
    """Quantity drawn from one lot."""

    lot_id: str
    qty: float
    expires_at: str
    is_expired: bool


@dataclass(frozen=True)
class AllocationResult(Record):
    """Outcome of a FIFO allocation. missing_qty > 0 means partial."""

    allocations: tuple[AllocationLine, ...]
    fulfilled_qty: float
    missing_qty: float
    used_expired: bool
    warnings: tuple[str, ...] = ()

    @property
    def fully_fulfilled(self) -> bool:
        return self.missing_qty == 0


# ══════════════════════════════════════════════════════════════
# MOVEMENT VALIDATION
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MovementRequest(Record):
    """
    Proposed movement, as received from the host (raw strings).

    current_status/new_status are only set when asking to transition an
    existing movement.
    """

    movement_type: str
    status: str
    requested_by_role: str
    motive: str | None = None
    approver_role: str | None = None
    has_work_order: bool | None = None
    current_status: str | None = None
    new_status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MovementRequest:
        return cls(
            movement_type=pick(data, 'movement_type'),
            status=pick(data, 'status'),
            requested_by_role=pick(data, 'requested_by_role'),
            motive=pick(data, 'motive', None),
            approver_role=pick(data, 'approver_role', None),
            has_work_order=pick_flag(data, 'has_work_order', None),
            current_status=pick(data, 'current_status', None),
            new_status=pick(data, 'new_status', None),
        )


@dataclass(frozen=True)
class ValidationResult(Record):
    """Successful validation. Invalid movements raise instead."""

    valid: bool
    movement_type: str
    status: str
    warnings: tuple[str, ...] = ()


# ══════════════════════════════════════════════════════════════
# RECONCILIATION
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ReconcileLine(Record):
    """Ledger (kardex) quantity vs physically counted (balance) quantity."""

    company_id: str
    location_id: str
    item_id: str
    lot_id: str | None
    kardex_qty: float
    balance_qty: float

    @property
    def key(self) -> tuple:
        return (self.company_id, self.location_id, self.item_id, self.lot_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReconcileLine:
        return cls(
            company_id=pick(data, 'company_id'),
            location_id=pick(data, 'location_id'),
            item_id=pick(data, 'item_id'),
            lot_id=pick(data, 'lot_id', None),
            kardex_qty=pick_number(data, 'kardex_qty'),
            balance_qty=pick_number(data, 'balance_qty'),
        )


@dataclass(frozen=True)
class Mismatch(Record):
    """Line whose |delta| exceeds the tolerance. delta = balance - kardex."""

    company_id: str
    location_id: str
    item_id: str
    lot_id: str | None
    kardex_qty: float
    balance_qty: float
    delta: float


@dataclass(frozen=True)
class ReconcileResult(Record):
    balanced: bool
    checked_lines: int
    mismatch_count: int
    mismatches: tuple[Mismatch, ...] = ()


# ══════════════════════════════════════════════════════════════
# LEDGER
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MovementLine(Record):
    location_id: str
    item_id: str
    lot_id: str | None
    delta_qty: float  # Positive = in, negative = out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MovementLine:
        return cls(
            location_id=pick(data, 'location_id'),
            item_id=pick(data, 'item_id'),
            lot_id=pick(data, 'lot_id', None),
            delta_qty=pick_number(data, 'delta_qty'),
        )


@dataclass(frozen=True)
class Movement(Record):
    """Recorded kardex movement. Only APPROVED movements affect balances."""

    id: str
    company_id: str
    movement_type: str
    status: str
    created_at: str  # ISO timestamp
    lines: tuple[MovementLine, ...] = ()
    reason: str | None = None
    work_order_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Movement:
        return cls(
            id=pick(data, 'id'),
            company_id=pick(data, 'company_id'),
            movement_type=pick(data, 'movement_type'),
            status=pick(data, 'status'),
            created_at=pick(data, 'created_at'),
            lines=tuple(
                MovementLine.coerce(line) for line in pick_items(data, 'lines')
            ),
            reason=pick(data, 'reason', None),
            work_order_id=pick(data, 'work_order_id', None),
        )


@dataclass(frozen=True)
class Balance(Record):
    """Stock quantity at (company, location, item, lot)."""

    company_id: str
    location_id: str
    item_id: str
    lot_id: str | None
    quantity: float
    updated_at: str | None = field(default=None, compare=False)

    @property
    def key(self) -> tuple:
        return (self.company_id, self.location_id, self.item_id, self.lot_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Balance:
        return cls(
            company_id=pick(data, 'company_id'),
            location_id=pick(data, 'location_id'),
            item_id=pick(data, 'item_id'),
            lot_id=pick(data, 'lot_id', None),
            quantity=pick_number(data, 'quantity'),
            updated_at=pick(data, 'updated_at', None),
        )
