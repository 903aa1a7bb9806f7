from fastapi import APIRouter, Depends, status

from app.core.constants import INVENTORY_ROLES
from app.core.security import Principal
from app.dependencies import get_current_principal, get_sale_recorder, require_role
from app.schemas.sale import SaleCreate, SaleRead
from app.services.sale_service import SaleRecorder

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post("", response_model=SaleRead, status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: SaleCreate,
    recorder: SaleRecorder = Depends(get_sale_recorder),
    principal: Principal = Depends(get_current_principal),
):
    return recorder.record_sale(
        car_id=payload.car_id,
        customer=payload.customer,
        amount=payload.amount,
        payment_method=payload.payment_method,
        salesperson_id=principal.user_id,
        notes=payload.notes,
    )


@router.get("/{sale_id}", response_model=SaleRead)
def read_sale(
    sale_id: int,
    recorder: SaleRecorder = Depends(get_sale_recorder),
    _principal: Principal = Depends(get_current_principal),
):
    return recorder.get_sale(sale_id)


@router.post("/{sale_id}/cancel", response_model=SaleRead)
def cancel_sale(
    sale_id: int,
    recorder: SaleRecorder = Depends(get_sale_recorder),
    _principal: Principal = Depends(require_role(*INVENTORY_ROLES)),
):
    return recorder.cancel_sale(sale_id)


__all__ = ["router"]
