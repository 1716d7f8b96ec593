import unittest
from datetime import datetime, timedelta, timezone

from organic_trace.core.errors import RemoteError
from organic_trace.database.base import Base
from organic_trace.database.engine import build_engine
from organic_trace.services.sql_client import SqlTableClient
from organic_trace.services.table_client import OrderBy, newest_first


class SqlTableClientTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(bind=self.engine)
        self.client = SqlTableClient(self.engine)

    def tearDown(self):
        self.engine.dispose()

    async def _product(self, name, **extra):
        record = {
            "name": name,
            "category": "Grains",
            "unit": "kg",
            "origin": "Mandya",
            "certification": "India Organic",
            "created_by": "u1",
        }
        record.update(extra)
        return await self.client.insert("products", record)

    async def test_insert_returns_stored_row_with_defaults(self):
        row = await self._product("Organic Ragi")
        self.assertTrue(row["id"])
        self.assertEqual(row["name"], "Organic Ragi")
        self.assertIsNotNone(row["created_at"])

    async def test_list_filters_and_orders(self):
        now = datetime.now(timezone.utc)
        await self._product("Old", created_at=now - timedelta(days=2))
        await self._product("New", created_at=now)
        await self._product("Other user", created_by="u2")

        rows = await self.client.list("products", {"created_by": "u1"}, newest_first())
        self.assertEqual([row["name"] for row in rows], ["New", "Old"])

        rows = await self.client.list("products", {"created_by": "u1"}, OrderBy("name"), limit=1)
        self.assertEqual([row["name"] for row in rows], ["New"])

    async def test_none_filter_matches_null(self):
        await self.client.insert(
            "entry_products",
            {"user_id": "u1", "product_id": "p1", "quantity": 1.0, "batch_number": "B-1", "received_from": None},
        )
        await self.client.insert(
            "entry_products",
            {"user_id": "u1", "product_id": "p1", "quantity": 2.0, "batch_number": "B-2", "received_from": "u9"},
        )
        rows = await self.client.list("entry_products", {"received_from": None})
        self.assertEqual([row["batch_number"] for row in rows], ["B-1"])

    async def test_count(self):
        await self._product("A")
        await self._product("B", created_by="u2")
        self.assertEqual(await self.client.count("products"), 2)
        self.assertEqual(await self.client.count("products", {"created_by": "u2"}), 1)

    async def test_search_is_case_insensitive_substring(self):
        await self._product("Organic Tomatoes")
        await self._product("Ragi")
        await self._product("100%_Pure Honey")

        rows = await self.client.search("products", "name", "TOMATO")
        self.assertEqual([row["name"] for row in rows], ["Organic Tomatoes"])
        rows = await self.client.search("products", "name", "%_")
        self.assertEqual([row["name"] for row in rows], ["100%_Pure Honey"])

    async def test_event_metadata_round_trip(self):
        row = await self.client.insert(
            "supply_chain_events",
            {"batch_number": "B-1", "event_type": "entry", "metadata": {"lot": 7}},
        )
        self.assertEqual(row["metadata"], {"lot": 7})
        self.assertIsNotNone(row["timestamp"])

    async def test_unknown_table_and_column_raise_remote_error(self):
        with self.assertRaises(RemoteError):
            await self.client.list("orders")
        with self.assertRaises(RemoteError):
            await self.client.list("products", {"colour": "red"})
        with self.assertRaises(RemoteError):
            await self.client.insert("products", {"name": "x", "colour": "red"})

    async def test_constraint_violation_is_remote_error_and_not_applied(self):
        with self.assertRaises(RemoteError):
            await self.client.insert("products", {"name": "Missing required columns"})
        self.assertEqual(await self.client.count("products"), 0)


if __name__ == "__main__":
    unittest.main()
