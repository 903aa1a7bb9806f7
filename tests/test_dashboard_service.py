import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy import update

from app.config import get_settings
from app.core.errors import ValidationError
from app.models.sale import Sale
from app.services.dashboard_service import dashboard_overview
from app.services.sale_service import SaleRecorder
from tests.helpers import Store, customer


class DashboardOverviewTest(unittest.TestCase):
    def setUp(self):
        self.store = Store()
        self.recorder = SaleRecorder(self.store.coordinator)
        self.salesperson_id = self.store.add_user("sam")

    def tearDown(self):
        self.store.close()

    def _sell(self, car_id, amount):
        return self.recorder.record_sale(
            car_id=car_id,
            customer=customer(),
            amount=amount,
            payment_method="card",
            salesperson_id=self.salesperson_id,
        )

    def _overview(self, days=None):
        return self.store.coordinator.run_transaction(lambda db: dashboard_overview(db, days))

    def test_empty_dashboard(self):
        overview = self._overview()
        self.assertEqual(overview.summary.total_cars, 0)
        self.assertEqual(overview.summary.total_sales, 0)
        self.assertEqual(overview.summary.total_revenue, Decimal("0.00"))
        self.assertEqual(overview.summary.average_sale_value, Decimal("0.00"))
        self.assertEqual(overview.summary.days, get_settings().DASHBOARD_DEFAULT_DAYS)
        self.assertEqual(overview.low_stock_cars, [])
        self.assertEqual(overview.recent_sales, [])

    def test_totals_only_count_completed_sales_in_window(self):
        busy = self.store.add_car(in_stock=10, name="Busy")
        self._sell(busy, "1000.00")
        self._sell(busy, "3000.00")
        old = self._sell(busy, "5000.00")
        cancelled = self._sell(busy, "7000.00")
        self.recorder.cancel_sale(cancelled.id)

        long_ago = datetime.now(timezone.utc) - timedelta(days=90)
        self.store.coordinator.run_transaction(
            lambda db: db.execute(update(Sale).where(Sale.id == old.id).values(created_at=long_ago))
        )

        overview = self._overview(days=30)

        self.assertEqual(overview.summary.total_cars, 1)
        self.assertEqual(overview.summary.total_sales, 2)
        self.assertEqual(overview.summary.total_revenue, Decimal("4000.00"))
        self.assertEqual(overview.summary.average_sale_value, Decimal("2000.00"))
        self.assertEqual(len(overview.recent_sales), 4)
        self.assertEqual(overview.recent_sales[0].car_name, "Busy")

    def test_low_stock_cars_ordered_by_stock(self):
        self.store.add_car(in_stock=9, name="Plenty")
        two = self.store.add_car(in_stock=2, name="Two left")
        none = self.store.add_car(in_stock=0, name="Sold out")

        with patch.object(get_settings(), "LOW_STOCK_THRESHOLD", 2):
            overview = self._overview()

        self.assertEqual([car.id for car in overview.low_stock_cars], [none, two])

    def test_recent_sales_respect_limit(self):
        car_id = self.store.add_car(in_stock=5)
        for _ in range(4):
            self._sell(car_id, 100)

        with patch.object(get_settings(), "RECENT_SALES_LIMIT", 2):
            overview = self._overview()

        self.assertEqual(len(overview.recent_sales), 2)

    def test_days_must_be_positive(self):
        with self.assertRaises(ValidationError):
            self._overview(days=0)


if __name__ == "__main__":
    unittest.main()
