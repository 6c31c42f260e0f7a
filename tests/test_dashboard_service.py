import unittest
from datetime import date, datetime

from shopledger.models import Expense
from shopledger.services.dashboard_service import inventory_overview
from tests.support import add_item, add_sale, make_session


class DashboardServiceTest(unittest.TestCase):
    def setUp(self):
        self.db = make_session()

    def tearDown(self):
        self.db.close()

    def test_overview_totals(self):
        tea = add_item(self.db, name="Tea", stock=40)
        add_item(self.db, name="Bun", stock=3)
        add_sale(self.db, tea, quantity=2, unit_price=50.0, sold_at=datetime(2026, 10, 18, 9, 30))
        add_sale(self.db, tea, quantity=1, unit_price=30.0, sold_at=datetime(2026, 10, 2, 17, 0))
        add_sale(self.db, tea, quantity=1, unit_price=20.0, sold_at=datetime(2026, 9, 30, 23, 59, 59))
        self.db.add_all(
            [
                Expense(description="Milk", category="Supplies", amount=45.5, spent_at=datetime(2026, 10, 1)),
                Expense(description="Rent", category="Rent", amount=100.0, spent_at=datetime(2026, 9, 1)),
            ]
        )
        self.db.commit()

        overview = inventory_overview(self.db, today=date(2026, 10, 18))

        self.assertEqual(
            overview,
            {
                "total_expenses": 145.5,
                "total_revenue": 150.0,
                "net_profit": 4.5,
                "total_items": 2,
                "low_stock_items": 1,
                "today_sales": 100.0,
                "this_month_sales": 130.0,
            },
        )

    def test_december_month_window(self):
        tea = add_item(self.db, name="Tea", stock=40)
        add_sale(self.db, tea, quantity=1, unit_price=10.0, sold_at=datetime(2026, 12, 31, 23, 0))
        add_sale(self.db, tea, quantity=1, unit_price=99.0, sold_at=datetime(2027, 1, 1, 0, 0))

        overview = inventory_overview(self.db, today=date(2026, 12, 5))

        self.assertEqual(overview["this_month_sales"], 10.0)
        self.assertEqual(overview["today_sales"], 0.0)

    def test_empty_store(self):
        overview = inventory_overview(self.db, today=date(2026, 10, 18))
        self.assertEqual(overview["net_profit"], 0.0)
        self.assertEqual(overview["total_items"], 0)


if __name__ == "__main__":
    unittest.main()
