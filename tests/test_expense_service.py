import unittest
from datetime import date, datetime, timedelta, timezone

from shopledger.schemas.expense import ExpenseCreate
from shopledger.services.expense_service import create_expense, list_expenses, total_expenses
from tests.support import make_session


class ExpenseServiceTest(unittest.TestCase):
    def setUp(self):
        self.db = make_session()

    def tearDown(self):
        self.db.close()

    def test_offset_timestamp_is_stored_as_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        payload = ExpenseCreate(
            description="Gas cylinder",
            category="Utilities",
            amount=950,
            spent_at=datetime(2026, 10, 18, 1, 30, tzinfo=ist),
        )

        expense = create_expense(self.db, payload)

        self.assertEqual(expense.spent_at.replace(tzinfo=None), datetime(2026, 10, 17, 20, 0))
        on_utc_day = list_expenses(self.db, date_from=date(2026, 10, 17), date_to=date(2026, 10, 17))
        self.assertEqual([e.id for e in on_utc_day], [expense.id])
        on_local_day = list_expenses(self.db, date_from=date(2026, 10, 18), date_to=date(2026, 10, 18))
        self.assertEqual(on_local_day, [])

    def test_naive_timestamp_kept_and_amount_rounded(self):
        payload = ExpenseCreate(
            description="Milk",
            amount=120.505,
            spent_at=datetime(2026, 10, 18, 7, 0),
        )

        expense = create_expense(self.db, payload)

        self.assertEqual(expense.spent_at, datetime(2026, 10, 18, 7, 0))
        self.assertEqual(expense.category, "General")
        self.assertEqual(total_expenses(self.db), 120.51)


if __name__ == "__main__":
    unittest.main()
