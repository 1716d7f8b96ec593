import unittest

from organic_trace.core.errors import TraceNotFound
from organic_trace.core.security import Identity
from organic_trace.database.base import Base
from organic_trace.database.engine import build_engine
from organic_trace.services.sql_client import SqlTableClient
from organic_trace.services.trace_service import trace_batch, trace_product
from organic_trace.services.view_service import record_event, submit_entry, submit_exit, submit_product

FARMER = Identity(user_id="u-farm")


class TraceServiceTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(bind=self.engine)
        self.client = SqlTableClient(self.engine)

        await self.client.insert("profiles", {"id": "u-farm", "full_name": "Green Valley Farm"})
        await self.client.insert("profiles", {"id": "u-ret", "full_name": "Corner Grocer"})
        self.product = await submit_product(
            self.client,
            FARMER,
            {
                "name": "Organic Tomatoes",
                "category": "Vegetables",
                "unit": "kg",
                "origin": "Nashik",
                "certification": "NPOP",
            },
        )
        entry = await submit_entry(
            self.client,
            FARMER,
            {"product_id": self.product["id"], "quantity": 40, "batch_number": "TOM-2024-01"},
            record_events=True,
        )
        await submit_exit(
            self.client,
            FARMER,
            {"entry_product_id": entry["id"], "quantity": 15, "assigned_to": "u-ret"},
            record_events=True,
        )

    async def asyncTearDown(self):
        self.engine.dispose()

    async def test_trace_batch_returns_ordered_timeline(self):
        result = await trace_batch(self.client, "  TOM-2024-01 ")
        self.assertEqual(result.product["name"], "Organic Tomatoes")
        self.assertEqual([event["event_type"] for event in result.events], ["entry", "exit"])
        self.assertEqual([event["step"] for event in result.events], [1, 2])
        self.assertEqual(result.events[1]["to_user_name"], "Corner Grocer")

    async def test_trace_product_matches_partial_name(self):
        result = await trace_product(self.client, "tomato")
        self.assertEqual(result.product["id"], self.product["id"])
        self.assertEqual(len(result.events), 2)

    async def test_blank_input_is_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            await trace_batch(self.client, "   ")
        self.assertEqual(str(ctx.exception), "Please enter a batch number")
        with self.assertRaises(ValueError):
            await trace_product(self.client, "")

    async def test_unknown_batch_and_product(self):
        with self.assertRaises(TraceNotFound) as ctx:
            await trace_batch(self.client, "NOPE-1")
        self.assertEqual(ctx.exception.message, "No batch found")
        with self.assertRaises(TraceNotFound) as ctx:
            await trace_product(self.client, "spinach")
        self.assertEqual(ctx.exception.message, "No product found")

    async def test_batch_with_missing_product(self):
        await record_event(
            self.client,
            {"batch_number": "ORPHAN-1", "event_type": "entry", "product_id": "p-missing"},
        )
        with self.assertRaises(TraceNotFound) as ctx:
            await trace_batch(self.client, "ORPHAN-1")
        self.assertEqual(ctx.exception.message, "Product not found for this batch")


if __name__ == "__main__":
    unittest.main()
