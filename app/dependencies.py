from typing import Optional

from fastapi import Depends, Header

from app.core.security import Principal, authenticate_request, ensure_role
from app.database.session import SessionLocal
from app.database.transaction import SqlAlchemyTransactionCoordinator, TransactionCoordinator
from app.services.inventory_ledger import InventoryLedger
from app.services.sale_service import SaleRecorder


def get_coordinator() -> TransactionCoordinator:
    return SqlAlchemyTransactionCoordinator(SessionLocal)


def get_sale_recorder(
    coordinator: TransactionCoordinator = Depends(get_coordinator),
) -> SaleRecorder:
    return SaleRecorder(coordinator)


def get_inventory_ledger(
    coordinator: TransactionCoordinator = Depends(get_coordinator),
) -> InventoryLedger:
    return InventoryLedger(coordinator)


def get_current_principal(
    authorization: Optional[str] = Header(None),
    coordinator: TransactionCoordinator = Depends(get_coordinator),
) -> Principal:
    # Short transaction of its own: no session stays open across the request.
    return coordinator.run_transaction(lambda db: authenticate_request(db, authorization))


def require_role(*roles: str):
    def _dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        return ensure_role(principal, roles)

    return _dependency


__all__ = [
    "get_coordinator",
    "get_current_principal",
    "get_inventory_ledger",
    "get_sale_recorder",
    "require_role",
]
