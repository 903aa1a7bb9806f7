from fastapi import APIRouter, Depends, status

from app.core.constants import INVENTORY_ROLES
from app.core.security import Principal
from app.database.transaction import TransactionCoordinator
from app.dependencies import get_coordinator, get_current_principal, get_inventory_ledger, require_role
from app.schemas.car import CarCreate, CarRead, RestockRequest, StockLevel
from app.services.car_service import create_car, get_car
from app.services.inventory_ledger import InventoryLedger

router = APIRouter(prefix="/cars", tags=["Cars"])


@router.post("", response_model=CarRead, status_code=status.HTTP_201_CREATED)
def add_car(
    payload: CarCreate,
    coordinator: TransactionCoordinator = Depends(get_coordinator),
    _principal: Principal = Depends(require_role(*INVENTORY_ROLES)),
):
    return coordinator.run_transaction(
        lambda db: CarRead.model_validate(create_car(db, payload))
    )


@router.get("/{car_id}", response_model=CarRead)
def read_car(car_id: int, coordinator: TransactionCoordinator = Depends(get_coordinator)):
    return coordinator.run_transaction(lambda db: get_car(db, car_id))


@router.get("/{car_id}/stock", response_model=StockLevel)
def read_stock(
    car_id: int,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
    _principal: Principal = Depends(get_current_principal),
):
    return StockLevel(car_id=car_id, in_stock=ledger.get_stock(car_id))


@router.post("/{car_id}/restock", response_model=StockLevel)
def restock_car(
    car_id: int,
    payload: RestockRequest,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
    _principal: Principal = Depends(require_role(*INVENTORY_ROLES)),
):
    return StockLevel(car_id=car_id, in_stock=ledger.restock(car_id, payload.quantity))


__all__ = ["router"]
