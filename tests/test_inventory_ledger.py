import unittest

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from app.core.errors import NotFoundError, OutOfStockError, ValidationError
from app.models.car import Car
from app.services.inventory_ledger import InventoryLedger, decrement_if_available
from tests.helpers import Store


class InventoryLedgerTest(unittest.TestCase):
    def setUp(self):
        self.store = Store()
        self.ledger = InventoryLedger(self.store.coordinator)

    def tearDown(self):
        self.store.close()

    def test_decrement_returns_new_stock(self):
        car_id = self.store.add_car(in_stock=3)
        self.assertEqual(self.ledger.decrement_stock(car_id), 2)
        self.assertEqual(self.store.stock_of(car_id), 2)

    def test_decrement_by_more_than_one(self):
        car_id = self.store.add_car(in_stock=5)
        self.assertEqual(self.ledger.decrement_stock(car_id, by=5), 0)

    def test_decrement_below_zero_is_refused(self):
        car_id = self.store.add_car(in_stock=2)
        with self.assertRaises(OutOfStockError) as ctx:
            self.ledger.decrement_stock(car_id, by=3)
        self.assertEqual(ctx.exception.car_id, car_id)
        self.assertEqual(ctx.exception.requested, 3)
        self.assertEqual(self.store.stock_of(car_id), 2)

    def test_decrement_empty_car(self):
        car_id = self.store.add_car(in_stock=0)
        with self.assertRaises(OutOfStockError):
            self.ledger.decrement_stock(car_id)
        self.assertEqual(self.store.stock_of(car_id), 0)

    def test_decrement_missing_car(self):
        with self.assertRaises(NotFoundError):
            self.ledger.decrement_stock(999)

    def test_decrement_rejects_non_positive_quantities(self):
        car_id = self.store.add_car(in_stock=3)
        for bad in (0, -1, True, 1.5, "1"):
            with self.subTest(by=bad):
                with self.assertRaises(ValidationError) as ctx:
                    self.ledger.decrement_stock(car_id, by=bad)
                self.assertEqual(ctx.exception.fields, ["by"])
        self.assertEqual(self.store.stock_of(car_id), 3)

    def test_restock_and_get_stock(self):
        car_id = self.store.add_car(in_stock=0)
        self.assertEqual(self.ledger.restock(car_id, 4), 4)
        self.assertEqual(self.ledger.get_stock(car_id), 4)

    def test_restock_missing_car(self):
        with self.assertRaises(NotFoundError):
            self.ledger.restock(42, 1)
        with self.assertRaises(NotFoundError):
            self.ledger.get_stock(42)

    def test_restock_rejects_zero(self):
        car_id = self.store.add_car(in_stock=1)
        with self.assertRaises(ValidationError) as ctx:
            self.ledger.restock(car_id, 0)
        self.assertEqual(ctx.exception.fields, ["quantity"])

    def test_decrement_keeps_loaded_car_in_step(self):
        car_id = self.store.add_car(in_stock=2)

        def _unit(db):
            car = db.get(Car, car_id)
            decrement_if_available(db, car_id, 1)
            return car.in_stock

        self.assertEqual(self.store.coordinator.run_transaction(_unit), 1)

    def test_database_rejects_negative_stock(self):
        car_id = self.store.add_car(in_stock=0)
        with self.assertRaises(IntegrityError):
            self.store.coordinator.run_transaction(
                lambda db: db.execute(
                    update(Car).where(Car.id == car_id).values(in_stock=Car.in_stock - 1)
                )
            )
        self.assertEqual(self.store.stock_of(car_id), 0)


if __name__ == "__main__":
    unittest.main()
