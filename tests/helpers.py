from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from app.core.constants import ROLE_SALES_PERSONNEL
from app.database.base import Base
from app.database.engine import build_engine
from app.database.transaction import SqlAlchemyTransactionCoordinator
from app.models import import_all_models
from app.models.car import Car
from app.models.sale import Sale
from app.models.user import User


class Store:
    """A throwaway database with its coordinator, for one test."""

    def __init__(self, database_url: str = "sqlite://") -> None:
        import_all_models()
        self.engine = build_engine(database_url, busy_timeout_seconds=30)
        Base.metadata.create_all(bind=self.engine)
        self.session_factory = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        self.coordinator = SqlAlchemyTransactionCoordinator(self.session_factory)

    def close(self) -> None:
        self.engine.dispose()

    def add_user(self, username="sam", role=ROLE_SALES_PERSONNEL, is_active=True) -> int:
        def _add(db):
            user = User(
                username=username,
                email=f"{username}@dealership.example",
                first_name=username.title(),
                last_name="Tester",
                role=role,
                is_active=is_active,
            )
            db.add(user)
            db.flush()
            return user.id

        return self.coordinator.run_transaction(_add)

    def add_car(self, in_stock=1, name="Corolla LE", price="21500.00") -> int:
        def _add(db):
            car = Car(
                name=name,
                brand="Toyota",
                model="Corolla",
                category="Sedan",
                year=2024,
                price=Decimal(price),
                in_stock=in_stock,
            )
            db.add(car)
            db.flush()
            return car.id

        return self.coordinator.run_transaction(_add)

    def stock_of(self, car_id: int) -> int:
        return self.coordinator.run_transaction(
            lambda db: db.execute(select(Car.in_stock).where(Car.id == car_id)).scalar_one()
        )

    def sale_count(self, car_id: int | None = None, status: str | None = None) -> int:
        def _count(db):
            stmt = select(func.count(Sale.id))
            if car_id is not None:
                stmt = stmt.where(Sale.car_id == car_id)
            if status is not None:
                stmt = stmt.where(Sale.status == status)
            return db.execute(stmt).scalar_one()

        return self.coordinator.run_transaction(_count)


def customer(name="Jane Buyer", email="jane@example.com", phone=None) -> dict:
    return {"name": name, "email": email, "phone": phone}
