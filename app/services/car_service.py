import logging

import pydantic
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.car import Car
from app.schemas.car import CarCreate, CarRead
from app.services.inventory_ledger import find_car_by_id
from app.services.validation import validation_error_from

logger = logging.getLogger(__name__)


def create_car(db: Session, payload) -> Car:
    """Add a car to inventory. ``payload`` is a `CarCreate` or a plain mapping."""
    if not isinstance(payload, CarCreate):
        try:
            payload = CarCreate.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise validation_error_from(exc) from exc

    car = Car(**payload.model_dump())
    db.add(car)
    db.flush()
    logger.info("Car added to inventory", extra={"car_id": car.id, "in_stock": car.in_stock})
    return car


def get_car(db: Session, car_id: int) -> CarRead:
    car = find_car_by_id(db, car_id)
    if car is None:
        raise NotFoundError("Car not found")
    return CarRead.model_validate(car)
