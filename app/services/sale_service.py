"""
Sale recording.

A sale is written and the car's stock is decremented in one transaction run
by the transaction coordinator. Either both are committed or neither is: an
out-of-stock decrement raises after the Sale row was flushed, which rolls that
row back with the rest of the unit.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

import pydantic
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.constants import SALE_STATUS_CANCELLED, SALE_STATUS_COMPLETED
from app.core.errors import (
    ConflictError,
    NotFoundError,
    OutOfStockError,
    ValidationError,
)
from app.core.sale_lifecycle import returns_stock, validate_transition
from app.database.transaction import TransactionCoordinator
from app.models.car import Car
from app.models.sale import Sale
from app.models.user import User
from app.schemas.car import CarSummary
from app.schemas.sale import CustomerIn, SaleCreate, SalespersonSummary, SaleRead
from app.services.inventory_ledger import decrement_if_available, find_car_by_id, increment_stock
from app.services.validation import validation_error_from

logger = logging.getLogger(__name__)


def _require_id(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError([field], f"{field} must be a positive integer")
    return value


def parse_sale_request(
    *,
    car_id,
    customer,
    amount,
    payment_method,
    notes=None,
) -> SaleCreate:
    """Validate a sale request without touching the store."""
    if isinstance(customer, CustomerIn):
        customer = customer.model_dump()
    elif customer is not None and not isinstance(customer, Mapping):
        raise ValidationError(["customer"])
    try:
        return SaleCreate.model_validate(
            {
                "car_id": car_id,
                "customer": customer,
                "amount": amount,
                "payment_method": payment_method,
                "notes": notes,
            }
        )
    except pydantic.ValidationError as exc:
        raise validation_error_from(exc) from exc


def insert_sale(db: Session, record: Mapping[str, Any]) -> Sale:
    sale = Sale(**record)
    db.add(sale)
    db.flush()
    return sale


def build_sale_read(sale: Sale, car: Car, salesperson: User) -> SaleRead:
    return SaleRead(
        id=sale.id,
        status=sale.status,
        customer_name=sale.customer_name,
        customer_email=sale.customer_email,
        customer_phone=sale.customer_phone,
        amount=sale.amount,
        payment_method=sale.payment_method,
        notes=sale.notes,
        created_at=sale.created_at,
        updated_at=sale.updated_at,
        car=CarSummary.model_validate(car),
        salesperson=SalespersonSummary.model_validate(salesperson),
    )


def _load_active_salesperson(db: Session, salesperson_id: int) -> User:
    salesperson = db.get(User, salesperson_id)
    if salesperson is None or not salesperson.is_active:
        raise NotFoundError("Salesperson not found")
    return salesperson


def _record_sale_unit(db: Session, request: SaleCreate, salesperson_id: int) -> SaleRead:
    car = find_car_by_id(db, request.car_id, for_update=True)
    if car is None:
        raise NotFoundError("Car not found")
    if car.in_stock < 1:
        raise OutOfStockError(car.id)

    salesperson = _load_active_salesperson(db, salesperson_id)

    sale = insert_sale(
        db,
        {
            "car_id": car.id,
            "salesperson_id": salesperson.id,
            "customer_name": request.customer.name,
            "customer_email": str(request.customer.email),
            "customer_phone": request.customer.phone,
            "amount": request.amount,
            "payment_method": request.payment_method,
            "notes": request.notes,
            "status": SALE_STATUS_COMPLETED,
        },
    )
    # The guarded decrement is authoritative; the check above only fails fast.
    decrement_if_available(db, car.id, 1)
    return build_sale_read(sale, car, salesperson)


class SaleRecorder:
    def __init__(self, coordinator: TransactionCoordinator) -> None:
        self._coordinator = coordinator

    def record_sale(
        self,
        car_id,
        customer,
        amount,
        payment_method,
        salesperson_id,
        notes: Optional[str] = None,
    ) -> SaleRead:
        """
        Record a completed sale of one unit of a car.

        Input is validated before the store is touched. The car lookup, the
        Sale insert and the stock decrement then run as one transaction.

        Raises `ValidationError`, `NotFoundError`, `OutOfStockError`,
        `ConflictError` or `StoreUnavailableError`. Nothing is retried here;
        a caller retrying after `ConflictError` must call this method again
        so the stock is re-read.
        """
        request = parse_sale_request(
            car_id=car_id,
            customer=customer,
            amount=amount,
            payment_method=payment_method,
            notes=notes,
        )
        salesperson_id = _require_id(salesperson_id, "salesperson_id")

        try:
            result = self._coordinator.run_transaction(
                lambda db: _record_sale_unit(db, request, salesperson_id)
            )
        except OutOfStockError:
            logger.warning("Sale rejected: car out of stock", extra={"car_id": request.car_id})
            raise
        except ConflictError:
            logger.warning("Sale aborted by a concurrent update", extra={"car_id": request.car_id})
            raise

        logger.info(
            "Sale recorded",
            extra={
                "sale_id": result.id,
                "car_id": result.car.id,
                "salesperson_id": salesperson_id,
                "in_stock": result.car.in_stock,
            },
        )
        return result

    def cancel_sale(self, sale_id) -> SaleRead:
        """Cancel a sale; a completed sale gives its unit back to stock."""
        sale_id = _require_id(sale_id, "sale_id")

        def _cancel(db: Session) -> SaleRead:
            sale = (
                db.execute(select(Sale).where(Sale.id == sale_id).with_for_update())
                .scalars()
                .first()
            )
            if sale is None:
                raise NotFoundError("Sale not found")

            from_status = sale.status
            validate_transition(sale_id=sale.id, from_status=from_status, to_status=SALE_STATUS_CANCELLED)

            result = db.execute(
                update(Sale)
                .where(Sale.id == sale.id, Sale.status == from_status)
                .values(status=SALE_STATUS_CANCELLED, updated_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ConflictError("Sale status changed concurrently; retry.")

            if returns_stock(from_status=from_status, to_status=SALE_STATUS_CANCELLED):
                increment_stock(db, sale.car_id, 1)

            db.refresh(sale)
            car = find_car_by_id(db, sale.car_id)
            salesperson = db.get(User, sale.salesperson_id)
            return build_sale_read(sale, car, salesperson)

        result = self._coordinator.run_transaction(_cancel)
        logger.info(
            "Sale cancelled",
            extra={"sale_id": result.id, "car_id": result.car.id, "in_stock": result.car.in_stock},
        )
        return result

    def get_sale(self, sale_id) -> SaleRead:
        sale_id = _require_id(sale_id, "sale_id")

        def _read(db: Session) -> SaleRead:
            sale = db.get(Sale, sale_id)
            if sale is None:
                raise NotFoundError("Sale not found")
            car = find_car_by_id(db, sale.car_id)
            salesperson = db.get(User, sale.salesperson_id)
            return build_sale_read(sale, car, salesperson)

        return self._coordinator.run_transaction(_read)


__all__ = [
    "SaleRecorder",
    "build_sale_read",
    "insert_sale",
    "parse_sale_request",
]
