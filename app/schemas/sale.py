from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.car import CarSummary


class CustomerIn(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class SaleCreate(BaseModel):
    car_id: int = Field(gt=0)
    customer: CustomerIn
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payment_method: str = Field(min_length=1)
    notes: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class SalespersonSummary(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class SaleRead(BaseModel):
    id: int
    status: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    amount: Decimal
    payment_method: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    car: CarSummary
    salesperson: SalespersonSummary

    model_config = ConfigDict(from_attributes=True)
