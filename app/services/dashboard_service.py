from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import SALE_STATUS_COMPLETED
from app.core.errors import ValidationError
from app.models.car import Car
from app.models.sale import Sale
from app.schemas.dashboard import DashboardOverview, DashboardSummary, LowStockCar, RecentSale

_CENTS = Decimal("0.01")


def _window_start(days: int, now: datetime | None = None) -> datetime:
    if now is None:
        now = datetime.now(timezone.utc)
    return now - timedelta(days=days)


def sales_totals(db: Session, since: datetime) -> tuple[int, Decimal]:
    row = db.execute(
        select(func.count(Sale.id), func.coalesce(func.sum(Sale.amount), 0)).where(
            Sale.status == SALE_STATUS_COMPLETED,
            Sale.created_at >= since,
        )
    ).one()
    count, revenue = row
    return int(count or 0), Decimal(str(revenue or 0)).quantize(_CENTS)


def low_stock_cars(db: Session, threshold: int, limit: int) -> list[LowStockCar]:
    cars = (
        db.execute(
            select(Car)
            .where(Car.in_stock <= threshold)
            .order_by(Car.in_stock.asc(), Car.id.asc())
            .limit(limit)
        )
        .scalars()
        .all()
    )
    return [LowStockCar.model_validate(car) for car in cars]


def recent_sales(db: Session, limit: int) -> list[RecentSale]:
    rows = db.execute(
        select(Sale, Car.name)
        .join(Car, Car.id == Sale.car_id)
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .limit(limit)
    ).all()
    return [
        RecentSale(
            id=sale.id,
            car_id=sale.car_id,
            car_name=car_name,
            customer_name=sale.customer_name,
            amount=sale.amount,
            status=sale.status,
            created_at=sale.created_at,
        )
        for sale, car_name in rows
    ]


def dashboard_overview(db: Session, days: int | None = None) -> DashboardOverview:
    settings = get_settings()
    if days is None:
        days = settings.DASHBOARD_DEFAULT_DAYS
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValidationError(["days"], "days must be a positive integer")

    total_cars = db.execute(select(func.count(Car.id))).scalar_one()
    total_sales, total_revenue = sales_totals(db, _window_start(days))
    average = (total_revenue / total_sales).quantize(_CENTS) if total_sales else Decimal("0.00")

    return DashboardOverview(
        summary=DashboardSummary(
            total_cars=total_cars,
            total_sales=total_sales,
            total_revenue=total_revenue,
            average_sale_value=average,
            days=days,
        ),
        low_stock_cars=low_stock_cars(db, settings.LOW_STOCK_THRESHOLD, settings.LOW_STOCK_LIMIT),
        recent_sales=recent_sales(db, settings.RECENT_SALES_LIMIT),
    )


__all__ = ["dashboard_overview", "low_stock_cars", "recent_sales", "sales_totals"]
