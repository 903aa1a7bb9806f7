from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DashboardSummary(BaseModel):
    total_cars: int
    total_sales: int
    total_revenue: Decimal
    average_sale_value: Decimal
    days: int


class LowStockCar(BaseModel):
    id: int
    name: str
    category: str
    in_stock: int

    model_config = ConfigDict(from_attributes=True)


class RecentSale(BaseModel):
    id: int
    car_id: int
    car_name: str
    customer_name: str
    amount: Decimal
    status: str
    created_at: datetime


class DashboardOverview(BaseModel):
    summary: DashboardSummary
    low_stock_cars: List[LowStockCar] = Field(default_factory=list)
    recent_sales: List[RecentSale] = Field(default_factory=list)
