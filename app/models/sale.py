from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String

from app.core.constants import SALE_STATUS_COMPLETED
from app.database.base import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    car_id = Column(Integer, ForeignKey("cars.id", ondelete="CASCADE"), nullable=False)
    salesperson_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String)

    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default=SALE_STATUS_COMPLETED)
    notes = Column(String)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_sales_amount_positive"),
        Index("idx_sales_car", "car_id"),
        Index("idx_sales_status_created", "status", "created_at"),
        Index("idx_sales_salesperson", "salesperson_id"),
    )


__all__ = ["Sale"]
