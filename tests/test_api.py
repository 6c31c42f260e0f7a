import unittest
from datetime import datetime

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from shopledger.database import get_db, make_session_factory
from shopledger.main import app
from tests.support import add_item, add_sale, make_engine


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()
        self.Session = make_session_factory(self.engine)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

        self.db = self.Session()

    def tearDown(self):
        self.db.close()
        app.dependency_overrides.clear()
        self.engine.dispose()


class SalesApiTest(ApiTestCase):
    def test_record_sale(self):
        item = add_item(self.db, stock=5, selling_price=100.0)

        response = self.client.post(
            "/sales", json={"item_id": item.id, "quantity": 5, "unit_price": 100}
        )

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["message"], "Sale recorded successfully")
        self.assertEqual(body["sale"]["total"], 500.0)
        self.assertEqual(body["sale"]["item"]["name"], "Masala Chai")

    def test_record_sale_errors(self):
        item = add_item(self.db, stock=2)
        cases = [
            ({}, 400, "Missing required fields"),
            ({"item_id": item.id, "quantity": 0, "unit_price": 10}, 400, "greater than 0"),
            ({"item_id": 999, "quantity": 1, "unit_price": 10}, 404, "Item not found"),
            ({"item_id": item.id, "quantity": 3, "unit_price": 10}, 400, "Available: 2, Required: 3"),
            ({"item_id": item.id, "quantity": 1, "unit_price": 1e26}, 400, "out of range"),
        ]
        for payload, status_code, message in cases:
            with self.subTest(payload=payload):
                response = self.client.post("/sales", json=payload)
                self.assertEqual(response.status_code, status_code)
                self.assertIn(message, response.json()["detail"])

    def test_record_sale_rejects_nan_price(self):
        item = add_item(self.db, stock=2)
        body = '{{"item_id": {}, "quantity": 1, "unit_price": NaN}}'.format(item.id)

        response = self.client.post(
            "/sales", content=body, headers={"Content-Type": "application/json"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("greater than 0", response.json()["detail"])
        self.assertEqual(self.client.get("/sales").json()["stats"]["total_sales"], 0)

    def test_list_sales_with_filters(self):
        tea = add_item(self.db, name="Tea", category="Beverages", stock=10)
        bun = add_item(self.db, name="Bun", category="Bakery", stock=10)
        add_sale(self.db, tea, quantity=2, unit_price=20.0, sold_at=datetime(2026, 10, 18, 23, 59, 59))
        add_sale(self.db, tea, quantity=1, unit_price=20.0, sold_at=datetime(2026, 10, 19, 0, 0, 0))
        add_sale(self.db, bun, quantity=1, unit_price=15.0, sold_at=datetime(2026, 10, 18, 8, 0, 0))

        response = self.client.get(
            "/sales",
            params={"dateFrom": "2026-10-18", "dateTo": "2026-10-18", "category": "Beverages"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["sales"]), 1)
        self.assertEqual(body["sales"][0]["item"]["category"], "Beverages")
        self.assertEqual(body["stats"]["total_revenue"], 40.0)
        self.assertEqual(body["stats"]["average_sale"], 40.0)

    def test_list_sales_search(self):
        tea = add_item(self.db, name="Ginger Tea", category="Beverages", stock=10)
        bun = add_item(self.db, name="Bun", category="Bakery", stock=10)
        add_sale(self.db, tea, quantity=2, unit_price=20.0)
        add_sale(self.db, bun, quantity=1, unit_price=15.0)

        body = self.client.get("/sales", params={"search": "ginger"}).json()
        self.assertEqual([s["item"]["name"] for s in body["sales"]], ["Ginger Tea"])
        self.assertEqual(body["stats"]["total_revenue"], 40.0)

        response = self.client.get("/sales/export", params={"format": "csv", "search": "bakery"})
        self.assertEqual(response.status_code, 200)
        self.assertIn('"Bun"', response.text)
        self.assertNotIn("Ginger Tea", response.text)

    def test_list_sales_rejects_bad_date(self):
        response = self.client.get("/sales", params={"dateFrom": "18/10/2026"})
        self.assertEqual(response.status_code, 400)

    def test_delete_sale(self):
        item = add_item(self.db, stock=5)
        sale = add_sale(self.db, item, quantity=2)

        response = self.client.delete("/sales", params={"id": sale.id})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Sale deleted and stock restored successfully")

        logs = self.client.get("/inventory-logs", params={"item_id": item.id}).json()
        self.assertEqual(logs[0]["type"], "in")
        self.assertEqual(logs[0]["quantity"], 2)

        self.assertEqual(self.client.delete("/sales", params={"id": sale.id}).status_code, 404)

    def test_delete_sale_requires_id(self):
        self.assertEqual(self.client.delete("/sales").status_code, 400)
        self.assertEqual(self.client.delete("/sales", params={"id": "abc"}).status_code, 400)

    def test_quick_sale(self):
        item = add_item(self.db, stock=5, selling_price=None, unit_price=12.0)
        response = self.client.post("/sales/quick/{}".format(item.id))
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["sale"]["total"], 12.0)

    def test_export(self):
        tea = add_item(self.db, name="Tea", stock=5)
        add_sale(self.db, tea, quantity=1, unit_price=20.0)

        response = self.client.get("/sales/export", params={"format": "csv"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("text/csv"))
        self.assertIn("sales-report-", response.headers["content-disposition"])
        self.assertIn('"Tea"', response.text)

        response = self.client.get("/sales/export", params={"format": "xlsx"})
        self.assertEqual(response.status_code, 200)
        self.assertIn(".xlsx", response.headers["content-disposition"])

        self.assertEqual(self.client.get("/sales/export", params={"format": "pdf"}).status_code, 400)


class InventoryApiTest(ApiTestCase):
    def test_create_restock_and_reconcile(self):
        response = self.client.post(
            "/inventory-items",
            json={"name": "Tea", "category": "Beverages", "current_stock": 8, "selling_price": 20},
        )
        self.assertEqual(response.status_code, 201)
        item_id = response.json()["id"]

        response = self.client.post(
            "/inventory-items/{}/restock".format(item_id), json={"quantity": 4}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["current_stock"], 12)

        self.client.post("/sales", json={"item_id": item_id, "quantity": 3, "unit_price": 20})

        report = self.client.get("/inventory-items/{}/reconciliation".format(item_id)).json()
        self.assertEqual(report["current_stock"], 9)
        self.assertTrue(report["consistent"])

    def test_low_stock_and_available(self):
        add_item(self.db, name="Tea", stock=0)
        add_item(self.db, name="Coffee", stock=25)

        low = self.client.get("/inventory-items/low-stock").json()
        self.assertEqual([i["name"] for i in low], ["Tea"])

        available = self.client.get("/inventory-items", params={"available": "true"}).json()
        self.assertEqual([i["name"] for i in available], ["Coffee"])

    def test_reconciliation_missing_item(self):
        self.assertEqual(self.client.get("/inventory-items/77/reconciliation").status_code, 404)


class AdminApiTest(ApiTestCase):
    def test_expenses_and_overview(self):
        response = self.client.post(
            "/expenses", json={"description": "Milk", "category": "Supplies", "amount": 120.5}
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.client.post("/expenses", json={"description": "x", "amount": 0}).status_code, 422)

        self.assertEqual(len(self.client.get("/expenses").json()), 1)

        overview = self.client.get("/dashboard/overview").json()
        self.assertEqual(overview["total_expenses"], 120.5)
        self.assertEqual(overview["net_profit"], -120.5)

    def test_users(self):
        response = self.client.post(
            "/users", json={"full_name": "Asha Rao", "email": "asha@example.com", "role": "admin"}
        )
        self.assertEqual(response.status_code, 201)
        duplicate = self.client.post("/users", json={"full_name": "A", "email": "asha@example.com"})
        self.assertEqual(duplicate.status_code, 409)

        self.assertEqual(len(self.client.get("/users", params={"search": "rao"}).json()), 1)
        self.assertEqual(self.client.get("/users/stats").json()["total_users"], 1)

    def test_health(self):
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")


if __name__ == "__main__":
    unittest.main()
