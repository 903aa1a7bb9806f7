from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CarBase(BaseModel):
    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    category: str = ""
    year: Optional[int] = Field(default=None, ge=1886)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    featured: bool = False
    image_url: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class CarCreate(CarBase):
    in_stock: int = Field(default=0, ge=0)


class CarRead(CarBase):
    id: int
    in_stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CarSummary(BaseModel):
    id: int
    name: str
    brand: str
    model: str
    category: str
    in_stock: int

    model_config = ConfigDict(from_attributes=True)


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)


class StockLevel(BaseModel):
    car_id: int
    in_stock: int
