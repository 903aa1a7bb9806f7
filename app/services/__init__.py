from app.services.car_service import create_car, get_car
from app.services.dashboard_service import dashboard_overview
from app.services.inventory_ledger import InventoryLedger
from app.services.sale_service import SaleRecorder

__all__ = [
    "InventoryLedger",
    "SaleRecorder",
    "create_car",
    "dashboard_overview",
    "get_car",
]
