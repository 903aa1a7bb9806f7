from fastapi import APIRouter, Depends, Query

from app.core.security import Principal
from app.database.transaction import TransactionCoordinator
from app.dependencies import get_coordinator, get_current_principal
from app.schemas.dashboard import DashboardOverview
from app.services.dashboard_service import dashboard_overview

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/overview", response_model=DashboardOverview)
def overview(
    days: int | None = Query(None, ge=1, le=3650, description="Look-back window in days"),
    coordinator: TransactionCoordinator = Depends(get_coordinator),
    _principal: Principal = Depends(get_current_principal),
):
    return coordinator.run_transaction(lambda db: dashboard_overview(db, days))


__all__ = ["router"]
