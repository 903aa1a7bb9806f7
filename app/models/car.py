from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Index, Integer, Numeric, String

from app.database.base import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True)

    name = Column(String, nullable=False)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    year = Column(Integer)

    price = Column(Numeric(12, 2), nullable=False)
    in_stock = Column(Integer, nullable=False, default=0)
    featured = Column(Boolean, nullable=False, default=False)
    image_url = Column(String)

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
        CheckConstraint("in_stock >= 0", name="ck_cars_in_stock_non_negative"),
        CheckConstraint("price > 0", name="ck_cars_price_positive"),
        Index("idx_cars_brand_model", "brand", "model"),
        Index("idx_cars_in_stock", "in_stock"),
    )


__all__ = ["Car"]
