import asyncio
import json
from collections import Counter

from organic_trace.core.constants import (
    ENTRY_PRODUCTS,
    EXIT_PRODUCTS,
    PRODUCTS,
    SUPPLY_CHAIN_EVENTS,
)
from organic_trace.core.dates import utc_now
from organic_trace.services.assembler import display_name
from organic_trace.services.lookup import build_index


# Chart label for entries whose product does not resolve.
UNLABELED_PRODUCT = "Unknown"


def _distribution(counter, label):
    # Counter iterates in first-seen order.
    return [{label: key, "count": count} for key, count in counter.items()]


def summarize(product_count, entry_rows, product_rows, exit_count, event_rows):
    product_index = build_index(product_rows)
    products = Counter(
        display_name(product_index, entry.get("product_id"), "name", UNLABELED_PRODUCT)
        for entry in entry_rows
    )
    event_types = Counter(str(event.get("event_type") or "unknown") for event in event_rows)
    return {
        "statistics": {
            "totalProducts": product_count,
            "totalEntries": len(entry_rows),
            "totalExits": exit_count,
            "totalEvents": len(event_rows),
        },
        "productDistribution": _distribution(products, "name"),
        "eventTypeDistribution": _distribution(event_types, "type"),
    }


async def collect_analytics(client):
    product_count, entries, products, exit_count, events = await asyncio.gather(
        client.count(PRODUCTS),
        client.list(ENTRY_PRODUCTS),
        client.list(PRODUCTS),
        client.count(EXIT_PRODUCTS),
        client.list(SUPPLY_CHAIN_EVENTS),
    )
    return summarize(product_count, entries, products, exit_count, events)


def build_report(analytics, generated_at=None):
    generated_at = generated_at or utc_now()
    return {
        "generatedAt": generated_at.isoformat(),
        "statistics": analytics["statistics"],
        "productDistribution": analytics["productDistribution"],
        "eventTypeDistribution": analytics["eventTypeDistribution"],
    }


def report_filename(day=None):
    day = day or utc_now().date()
    return "supply-chain-report-{}.json".format(day.isoformat())


def dump_report(report) -> str:
    return json.dumps(report, indent=2)


__all__ = [
    "UNLABELED_PRODUCT",
    "build_report",
    "collect_analytics",
    "dump_report",
    "report_filename",
    "summarize",
]
