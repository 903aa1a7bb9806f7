"""
Allowed status transitions for Sale records.

Pure rules only: no database access and no stock mutation. The sale recorder
consults these before writing a new status and applies any stock effect in the
same transaction.

Sales are created ``COMPLETED``; ``PENDING`` is a stored status value with no
outgoing transitions since nothing creates a pending sale.
"""

from app.core.constants import SALE_STATUS_CANCELLED, SALE_STATUS_COMPLETED
from app.core.errors import InvalidSaleTransitionError

TERMINAL_STATES = frozenset({SALE_STATUS_CANCELLED})

ALLOWED_TRANSITIONS = {
    SALE_STATUS_COMPLETED: frozenset({SALE_STATUS_CANCELLED}),
}

# Transitions that give the sold unit back to the car's stock.
RESTOCKING_TRANSITIONS = frozenset({(SALE_STATUS_COMPLETED, SALE_STATUS_CANCELLED)})


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False
    return to_status in ALLOWED_TRANSITIONS.get(from_status, frozenset())


def validate_transition(*, sale_id, from_status: str, to_status: str) -> None:
    if not can_transition(from_status=from_status, to_status=to_status):
        raise InvalidSaleTransitionError(
            f"Sale {sale_id} cannot transition from '{from_status}' to '{to_status}'"
        )


def returns_stock(*, from_status: str, to_status: str) -> bool:
    return (from_status, to_status) in RESTOCKING_TRANSITIONS
