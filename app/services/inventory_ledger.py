"""
Stock accounting for cars.

``Car.in_stock`` is only ever changed by the single-statement updates in this
module. The decrement carries its own ``in_stock >= :by`` guard, so the check
and the write are one atomic step for the database regardless of how many
workers or processes issue it concurrently.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, OutOfStockError, ValidationError
from app.database.transaction import TransactionCoordinator
from app.models.car import Car

logger = logging.getLogger(__name__)


def _require_positive_quantity(by, field: str = "by") -> int:
    if isinstance(by, bool) or not isinstance(by, int) or by < 1:
        raise ValidationError([field], f"{field} must be a positive integer")
    return by


def find_car_by_id(db: Session, car_id: int, *, for_update: bool = False) -> Car | None:
    stmt = select(Car).where(Car.id == car_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def read_stock(db: Session, car_id: int) -> int | None:
    return db.execute(select(Car.in_stock).where(Car.id == car_id)).scalar_one_or_none()


def decrement_if_available(db: Session, car_id: int, by: int = 1) -> int:
    """
    Take ``by`` units of a car out of stock inside the caller's transaction.

    Returns the new stock count. Raises `NotFoundError` when the car does not
    exist and `OutOfStockError` when fewer than ``by`` units remain.
    """
    by = _require_positive_quantity(by)
    result = db.execute(
        update(Car)
        .where(Car.id == car_id, Car.in_stock >= by)
        .values(in_stock=Car.in_stock - by)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        current = read_stock(db, car_id)
        if current is None:
            raise NotFoundError("Car not found")
        raise OutOfStockError(car_id, by)

    new_stock = read_stock(db, car_id)
    _refresh_loaded_car(db, car_id)
    return new_stock


def increment_stock(db: Session, car_id: int, by: int) -> int:
    """Return ``by`` units to a car's stock inside the caller's transaction."""
    by = _require_positive_quantity(by)
    result = db.execute(
        update(Car)
        .where(Car.id == car_id)
        .values(in_stock=Car.in_stock + by)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError("Car not found")

    new_stock = read_stock(db, car_id)
    _refresh_loaded_car(db, car_id)
    return new_stock


def _refresh_loaded_car(db: Session, car_id: int) -> None:
    # Keep an already loaded Car in the identity map in step with the row.
    car = db.identity_map.get(db.identity_key(Car, car_id))
    if car is not None:
        db.refresh(car, attribute_names=["in_stock", "updated_at"])


class InventoryLedger:
    """Stock operations that each run in their own transaction."""

    def __init__(self, coordinator: TransactionCoordinator) -> None:
        self._coordinator = coordinator

    def get_stock(self, car_id: int) -> int:
        def _read(db: Session) -> int:
            current = read_stock(db, car_id)
            if current is None:
                raise NotFoundError("Car not found")
            return current

        return self._coordinator.run_transaction(_read)

    def decrement_stock(self, car_id: int, by: int = 1) -> int:
        _require_positive_quantity(by)
        new_stock = self._coordinator.run_transaction(
            lambda db: decrement_if_available(db, car_id, by)
        )
        logger.info("Stock decremented by %s", by, extra={"car_id": car_id, "in_stock": new_stock})
        return new_stock

    def restock(self, car_id: int, by: int) -> int:
        _require_positive_quantity(by, "quantity")
        new_stock = self._coordinator.run_transaction(
            lambda db: increment_stock(db, car_id, by)
        )
        logger.info("Car restocked by %s", by, extra={"car_id": car_id, "in_stock": new_stock})
        return new_stock


__all__ = [
    "InventoryLedger",
    "decrement_if_available",
    "find_car_by_id",
    "increment_stock",
    "read_stock",
]
