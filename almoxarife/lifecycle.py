"""
Purchase order lifecycle — isolated, testable, reusable.

Transition table for OrderStatus. No database access here; the
orchestrator (services/orders.py) loads, locks and saves.

    PEND → ANDA, CANC
    ANDA → CONC, CANC
    CONC, CANC: terminal
"""

from almoxarife.exceptions import InvalidTransition
from almoxarife.models.enums import OrderStatus

INITIAL_STATUS = OrderStatus.PEND

TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PEND: frozenset({OrderStatus.ANDA, OrderStatus.CANC}),
    OrderStatus.ANDA: frozenset({OrderStatus.CONC, OrderStatus.CANC}),
    # Terminal states — no transitions allowed
    OrderStatus.CONC: frozenset(),
    OrderStatus.CANC: frozenset(),
}


def is_terminal(status) -> bool:
    """True for CONC and CANC."""
    return not TRANSITIONS[OrderStatus(status)]


def allowed_targets(status) -> frozenset[OrderStatus]:
    return TRANSITIONS[OrderStatus(status)]


def can_transition(current, target) -> bool:
    """
    Check whether ``current → target`` is in the transition table.

    Unknown status codes are never valid targets.
    """
    try:
        target = OrderStatus(target)
    except ValueError:
        return False
    return target in TRANSITIONS[OrderStatus(current)]


def validate_transition(order_id, current, target) -> OrderStatus:
    """
    Validate a status change.

    Returns:
        The target as an OrderStatus member.

    Raises:
        InvalidTransition: with order_id, current, requested and allowed.
    """
    if not can_transition(current, target):
        raise InvalidTransition(
            message=f"Transição inválida: {current} → {target}",
            order_id=order_id,
            current=str(current),
            requested=str(target),
            allowed=sorted(s.value for s in allowed_targets(current)),
        )
    return OrderStatus(target)
