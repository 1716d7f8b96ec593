"""Consumer-facing traceability search: batch or product name to timeline."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from organic_trace.core.constants import PRODUCTS, SUPPLY_CHAIN_EVENTS
from organic_trace.core.errors import TraceNotFound
from organic_trace.services.view_service import load_timeline

logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    product: Dict[str, Any]
    events: List[Dict[str, Any]] = field(default_factory=list)


async def _with_timeline(client, product):
    timeline = await load_timeline(client, product["id"])
    if timeline.error is not None:
        raise timeline.error
    return TraceResult(product=product, events=timeline.records)


async def trace_batch(client, batch_number):
    batch_number = (batch_number or "").strip()
    if not batch_number:
        raise ValueError("Please enter a batch number")

    events = await client.list(SUPPLY_CHAIN_EVENTS, {"batch_number": batch_number}, limit=1)
    if not events:
        raise TraceNotFound("No batch found")

    product_id = events[0].get("product_id")
    products = await client.list(PRODUCTS, {"id": product_id}, limit=1) if product_id else []
    if not products:
        raise TraceNotFound("Product not found for this batch")

    logger.info("Traced batch %s to product %s", batch_number, product_id)
    return await _with_timeline(client, products[0])


async def trace_product(client, name):
    name = (name or "").strip()
    if not name:
        raise ValueError("Please enter a product name")

    products = await client.search(PRODUCTS, "name", name, limit=1)
    if not products:
        raise TraceNotFound("No product found")
    return await _with_timeline(client, products[0])
