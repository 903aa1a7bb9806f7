import argparse
import logging
from decimal import Decimal

from sqlalchemy import delete, select

from app.core.constants import ROLE_INVENTORY_MANAGER, ROLE_SALES_PERSONNEL, ROLE_SUPER_ADMIN
from app.core.logging import setup_logging
from app.database import Base, SessionLocal, engine
from app.models import import_all_models
from app.models.car import Car
from app.models.sale import Sale
from app.models.user import User

logger = logging.getLogger("scripts.seed_data")


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample dealership data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        with db.begin():
            if args.reset:
                db.execute(delete(Sale))
                db.execute(delete(Car))
                db.execute(delete(User))

            has_user = db.execute(select(User.id).limit(1)).first()
            if has_user:
                logger.info("Seed skipped: users already exist.")
                return

            db.add_all(
                [
                    User(
                        username="admin",
                        email="admin@dealership.example",
                        first_name="Ada",
                        last_name="Admin",
                        role=ROLE_SUPER_ADMIN,
                    ),
                    User(
                        username="sales",
                        email="sales@dealership.example",
                        first_name="Sam",
                        last_name="Seller",
                        role=ROLE_SALES_PERSONNEL,
                    ),
                    User(
                        username="stock",
                        email="stock@dealership.example",
                        first_name="Ines",
                        last_name="Ventory",
                        role=ROLE_INVENTORY_MANAGER,
                    ),
                ]
            )
            db.add_all(
                [
                    Car(
                        name="Corolla LE",
                        brand="Toyota",
                        model="Corolla",
                        category="Sedan",
                        year=2024,
                        price=Decimal("21500.00"),
                        in_stock=3,
                        featured=True,
                    ),
                    Car(
                        name="CR-V EX",
                        brand="Honda",
                        model="CR-V",
                        category="SUV",
                        year=2023,
                        price=Decimal("32900.00"),
                        in_stock=1,
                    ),
                    Car(
                        name="Model 3",
                        brand="Tesla",
                        model="Model 3",
                        category="Electric",
                        year=2024,
                        price=Decimal("40240.00"),
                        in_stock=0,
                    ),
                ]
            )
        logger.info("Seed data created.")


if __name__ == "__main__":
    main()
