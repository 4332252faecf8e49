"""
Movement rules: may this movement (or this status change) be recorded?

Checks run in a fixed order and the first failure wins. A movement that
passes is always ``valid=True``; warnings are advisory and never block.
"""

import logging

from kardex.exceptions import KardexError
from kardex.models.enums import (
    APPROVER_ROLES,
    MOTIVE_REQUIRED_TYPES,
    OPEN_WORK_ORDER_STATUSES,
    TERMINAL_STATUSES,
    MovementStatus,
    MovementType,
    Role,
    normalize,
    parse_choice,
)
from kardex.models.records import MovementRequest, ValidationResult, pick

logger = logging.getLogger('kardex')

WARNING_SUPERVISOR_SCRAP = 'Supervisor aprobando SCRAP: revisar politica interna de montos'


def _require_motive(request, movement_type, status):
    if movement_type in MOTIVE_REQUIRED_TYPES and not (
        request.motive and request.motive.strip()
    ):
        raise KardexError('MOTIVE_REQUIRED', movement_type=movement_type)


def _require_pending_start(request, movement_type, status):
    if movement_type in MOTIVE_REQUIRED_TYPES and status != MovementStatus.PENDING:
        raise KardexError('MUST_START_PENDING', movement_type=movement_type, status=status)


def _require_work_order(request, movement_type, status):
    if movement_type == MovementType.OUT_OT and not request.has_work_order:
        raise KardexError('WORK_ORDER_REQUIRED')


def _check_transition(request, movement_type, status):
    """Status change of an existing movement: PENDING → APPROVED/REJECTED."""
    if request.current_status is None or request.new_status is None:
        return []

    if normalize(request.current_status) != MovementStatus.PENDING:
        raise KardexError('NOT_PENDING', current_status=request.current_status)

    if normalize(request.new_status) not in TERMINAL_STATUSES:
        raise KardexError('INVALID_TRANSITION', new_status=request.new_status)

    if request.approver_role is None:
        raise KardexError('APPROVER_REQUIRED')

    approver_role = normalize(request.approver_role)
    if approver_role not in APPROVER_ROLES:
        raise KardexError('APPROVER_NOT_ALLOWED', approver_role=request.approver_role)

    if approver_role == Role.SUPERVISOR and movement_type == MovementType.SCRAP:
        return [WARNING_SUPERVISOR_SCRAP]
    return []


# Order matters: callers rely on which error a given bad input triggers
POLICY_CHECKS = (
    _require_motive,
    _require_pending_start,
    _require_work_order,
    _check_transition,
)


class MovementRules:
    """Movement legality checks."""

    @classmethod
    def validate_movement(cls, request) -> ValidationResult:
        """
        Validate a proposed movement or status transition.

        Args:
            request: MovementRequest (or wire dict)

        Returns:
            ValidationResult with normalized type/status and warnings

        Raises:
            KardexError: First failed check (see POLICY_CHECKS for order)
        """
        request = MovementRequest.coerce(request)

        try:
            movement_type = parse_choice(
                MovementType, request.movement_type, 'INVALID_MOVEMENT_TYPE')
            status = parse_choice(MovementStatus, request.status, 'INVALID_STATUS')
            parse_choice(Role, request.requested_by_role, 'INVALID_ROLE')

            warnings = []
            for check in POLICY_CHECKS:
                warnings.extend(check(request, movement_type, status) or ())
        except KardexError as e:
            logger.debug(
                "kardex.movement.rejected",
                extra={"code": e.code, "movement_type": request.movement_type},
            )
            raise

        for warning in warnings:
            logger.warning(
                "kardex.movement.warning",
                extra={"movement_type": str(movement_type), "warning": warning},
            )
        logger.info(
            "kardex.movement.validated",
            extra={"movement_type": str(movement_type), "status": str(status)},
        )
        return ValidationResult(
            valid=True,
            movement_type=movement_type,
            status=status,
            warnings=tuple(warnings),
        )

    @classmethod
    def resolve_status(cls, approved: bool) -> MovementStatus:
        """Status a pending movement takes after an approval decision."""
        return MovementStatus.APPROVED if approved else MovementStatus.REJECTED

    @classmethod
    def count_open_work_orders(cls, work_orders) -> int:
        """
        Count work orders that are OPEN or IN_PROGRESS.

        Args:
            work_orders: Status strings, wire dicts with a ``status`` key,
                or objects with a ``status`` attribute
        """
        count = 0
        for work_order in work_orders:
            if isinstance(work_order, dict):
                status = pick(work_order, 'status')
            else:
                status = getattr(work_order, 'status', work_order)
            if isinstance(status, str) and normalize(status) in OPEN_WORK_ORDER_STATUSES:
                count += 1
        return count
