import asyncio
import unittest

from fastapi.testclient import TestClient

from organic_trace.core.errors import RemoteError
from organic_trace.core.security import Identity, get_identity
from organic_trace.database.base import Base
from organic_trace.database.engine import build_engine
from organic_trace.dependencies import get_public_table_client, get_table_client
from organic_trace.main import app
from organic_trace.services.sql_client import SqlTableClient

PRODUCT = {
    "name": "Organic Ragi",
    "category": "Grains",
    "unit": "kg",
    "origin": "Mandya",
    "certification": "India Organic",
}


class _OfflineClient:
    async def list(self, table, filters=None, order_by=None, *, limit=None):
        raise RemoteError("connection refused")

    async def insert(self, table, record):
        raise RemoteError("connection refused")


class ApiTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(bind=self.engine)
        self.table_client = SqlTableClient(self.engine)
        self.identity = Identity(user_id="u-farm")

        self._run(self.table_client.insert("profiles", {"id": "u-farm", "full_name": "Green Valley Farm"}))
        self._run(self.table_client.insert("user_roles", {"user_id": "u-farm", "role": "farmer"}))
        self._run(self.table_client.insert("profiles", {"id": "u-shop", "full_name": "Corner Grocer"}))
        self._run(self.table_client.insert("user_roles", {"user_id": "u-shop", "role": "retailer"}))

        app.dependency_overrides[get_identity] = lambda: self.identity
        app.dependency_overrides[get_table_client] = lambda: self.table_client
        app.dependency_overrides[get_public_table_client] = lambda: self.table_client
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    @staticmethod
    def _run(coro):
        return asyncio.run(coro)

    def _create_product(self):
        response = self.client.post("/products", json=PRODUCT)
        self.assertEqual(response.status_code, 201)
        return response.json()["created"]

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_product_create_returns_refreshed_view(self):
        response = self.client.post("/products", json=PRODUCT)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["created"]["name"], "Organic Ragi")
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["records"][0]["created_by"], "u-farm")

    def test_validation_error_is_422(self):
        response = self.client.post("/products", json=dict(PRODUCT, name=""))
        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.json(),
            {"detail": "Product name is required", "field": "name", "rule": "string_too_short"},
        )

    def test_non_finite_quantity_never_reaches_storage(self):
        product = self._create_product()
        response = self.client.post(
            "/entries",
            json={"product_id": product["id"], "quantity": "Infinity", "batch_number": "RAGI-0002"},
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["field"], "quantity")

        listing = self.client.get("/entries")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.json()["count"], 0)

    def test_retailer_cannot_manage_products(self):
        self.identity = Identity(user_id="u-shop")
        response = self.client.get("/products")
        self.assertEqual(response.status_code, 403)

    def test_entry_exit_and_trace(self):
        product = self._create_product()
        entry = self.client.post(
            "/entries",
            json={"product_id": product["id"], "quantity": 25, "batch_number": "RAGI-0001"},
        )
        self.assertEqual(entry.status_code, 201)
        entry_id = entry.json()["created"]["id"]
        self.assertEqual(entry.json()["records"][0]["product_name"], "Organic Ragi")

        exit_response = self.client.post(
            "/exits",
            json={"entry_product_id": entry_id, "quantity": 10, "assigned_to": "u-shop"},
        )
        self.assertEqual(exit_response.status_code, 201)
        record = exit_response.json()["records"][0]
        self.assertEqual(record["batch_number"], "RAGI-0001")
        self.assertEqual(record["assignee_name"], "Corner Grocer")

        trace = self.client.get("/trace/batch/RAGI-0001")
        self.assertEqual(trace.status_code, 200)
        self.assertEqual([event["step"] for event in trace.json()["events"]], [1, 2])

        qr = self.client.get("/entries/{}/qr".format(entry_id))
        self.assertEqual(qr.status_code, 200)
        self.assertEqual(qr.json()["filename"], "QR-RAGI-0001.png")

    def test_usage_for_retailer(self):
        self.identity = Identity(user_id="u-shop")
        response = self.client.post("/usage", json={"entry_product_id": "e-unknown"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"], "Enter quantity")

        response = self.client.get("/usage")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["records"], [])

    def test_unknown_batch_is_404(self):
        response = self.client.get("/trace/batch/NOTHING")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "No batch found")

    def test_blank_product_search_is_400(self):
        response = self.client.get("/trace/product", params={"name": "  "})
        self.assertEqual(response.status_code, 400)

    def test_remote_failures_map_to_502(self):
        app.dependency_overrides[get_table_client] = lambda: _OfflineClient()
        response = self.client.get("/entries")
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], "Failed to load data")

        response = self.client.post("/events", json={"batch_number": "B-1", "event_type": "entry"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], "Failed to save record")

    def test_analytics_report(self):
        self._create_product()
        response = self.client.get("/analytics/report")
        self.assertEqual(response.status_code, 200)
        self.assertIn("supply-chain-report-", response.headers["content-disposition"])
        self.assertEqual(response.json()["statistics"]["totalProducts"], 1)

    def test_profile_me(self):
        response = self.client.get("/profiles/me")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["role"], "farmer")
        self.assertTrue(body["permissions"]["manage_products"])


if __name__ == "__main__":
    unittest.main()
