"""
Enums for Kardex.

Closed enumerations for movement rules. Raw strings coming from a host are
normalized (trim + upper-case) and turned into one of these variants by
``parse_choice`` before any rule looks at them.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from kardex.exceptions import KardexError


class MovementType(models.TextChoices):
    """Kind of inventory movement recorded in the kardex."""
    INITIAL = 'INITIAL', _('Inventario Inicial')
    IN = 'IN', _('Entrada')
    OUT_OT = 'OUT_OT', _('Salida OT')          # Issue against a work order
    TRANSFER = 'TRANSFER', _('Traslado')
    ADJUST = 'ADJUST', _('Ajuste')
    SCRAP = 'SCRAP', _('Merma')


class MovementStatus(models.TextChoices):
    """Movement lifecycle status."""
    PENDING = 'PENDING', _('Pendiente')     # Awaiting approval
    APPROVED = 'APPROVED', _('Aprobado')    # Affects balances
    REJECTED = 'REJECTED', _('Rechazado')


class Role(models.TextChoices):
    """Warehouse user role."""
    BODEGUERO = 'BODEGUERO', _('Bodeguero')
    SUPERVISOR = 'SUPERVISOR', _('Supervisor')
    ADMIN = 'ADMIN', _('Administrador')
    SUPERADMIN = 'SUPERADMIN', _('Super Administrador')


class WorkOrderStatus(models.TextChoices):
    """Work order (OT) lifecycle status."""
    OPEN = 'OPEN', _('Abierta')
    IN_PROGRESS = 'IN_PROGRESS', _('En Progreso')
    DONE = 'DONE', _('Terminada')
    CANCELLED = 'CANCELLED', _('Cancelada')


# Movements that need a written motive and must go through approval
MOTIVE_REQUIRED_TYPES = frozenset({MovementType.ADJUST, MovementType.SCRAP})

# Roles allowed to approve or reject a pending movement
APPROVER_ROLES = frozenset({Role.SUPERVISOR, Role.ADMIN, Role.SUPERADMIN})

# Statuses a pending movement may move to
TERMINAL_STATUSES = frozenset({MovementStatus.APPROVED, MovementStatus.REJECTED})

# Work orders still accepting OUT_OT issues
OPEN_WORK_ORDER_STATUSES = frozenset({
    WorkOrderStatus.OPEN,
    WorkOrderStatus.IN_PROGRESS,
})


def normalize(value: str) -> str:
    """Trim and upper-case a raw enumeration value."""
    return value.strip().upper()


def parse_choice(choices, raw, code: str):
    """
    Build a ``choices`` member from a raw host value.

    Args:
        choices: TextChoices class
        raw: Raw value (any case, surrounding whitespace allowed)
        code: KardexError code raised when the value is not a member

    Returns:
        The matching member

    Raises:
        KardexError(code): If the normalized value is not a member
    """
    if isinstance(raw, choices):
        return raw
    value = normalize(raw) if isinstance(raw, str) else raw
    try:
        return choices(value)
    except ValueError:
        raise KardexError(code, value=raw) from None
