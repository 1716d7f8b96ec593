"""Load denormalized views and submit form records through the table façade."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from organic_trace.config import get_settings
from organic_trace.core.constants import (
    ENTRY_PRODUCTS,
    EVENT_ENTRY,
    EVENT_EXIT,
    EXIT_PRODUCTS,
    PRODUCTS,
    PROFILES,
    SUPPLY_CHAIN_EVENTS,
    USED_TODAY,
)
from organic_trace.core.errors import RemoteError
from organic_trace.services.assembler import assemble_entries, assemble_exits, assemble_usage, is_set
from organic_trace.services.lookup import build_index
from organic_trace.services.table_client import newest_first, oldest_first
from organic_trace.services.timeline import assemble_timeline, resolve_event_parties
from organic_trace.services.validation import (
    validate_entry,
    validate_event,
    validate_exit,
    validate_product,
    validate_usage,
)

logger = logging.getLogger(__name__)


@dataclass
class ViewResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    options: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    error: Optional[RemoteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failed(view, exc):
    logger.error("Failed to load %s view: %s", view, exc.message, extra={"view": view})
    return ViewResult(records=[], options={}, error=exc)


async def load_products(client, user_id):
    try:
        products = await client.list(PRODUCTS, {"created_by": user_id}, newest_first())
    except RemoteError as exc:
        return _failed("products", exc)
    return ViewResult(records=list(products))


async def load_entries(client, user_id):
    try:
        entries, products, profiles = await asyncio.gather(
            client.list(ENTRY_PRODUCTS, {"user_id": user_id}, newest_first()),
            client.list(PRODUCTS),
            client.list(PROFILES),
        )
    except RemoteError as exc:
        return _failed("entries", exc)

    records = assemble_entries(entries, build_index(products), build_index(profiles))
    return ViewResult(
        records=records,
        options={"products": list(products), "profiles": list(profiles)},
    )


async def load_exits(client, user_id):
    try:
        exits, entries, products, profiles = await asyncio.gather(
            client.list(EXIT_PRODUCTS, {"user_id": user_id}, newest_first()),
            client.list(ENTRY_PRODUCTS, {"user_id": user_id}),
            client.list(PRODUCTS),
            client.list(PROFILES),
        )
    except RemoteError as exc:
        return _failed("exits", exc)

    product_index = build_index(products)
    records = assemble_exits(exits, build_index(entries), product_index, build_index(profiles))
    return ViewResult(
        records=records,
        options={
            "entries": assemble_entries(entries, product_index, {}),
            "profiles": list(profiles),
        },
    )


async def load_usage(client, user_id):
    try:
        usage, entries, products = await asyncio.gather(
            client.list(USED_TODAY, {"user_id": user_id}, newest_first()),
            client.list(ENTRY_PRODUCTS),
            client.list(PRODUCTS),
        )
    except RemoteError as exc:
        return _failed("usage", exc)

    product_index = build_index(products)
    own_entries = [entry for entry in entries if entry.get("user_id") == user_id]
    return ViewResult(
        records=assemble_usage(usage, build_index(entries), product_index),
        options={"entries": assemble_entries(own_entries, product_index, {})},
    )


async def load_timeline(client, product_id):
    try:
        events, profiles = await asyncio.gather(
            client.list(
                SUPPLY_CHAIN_EVENTS,
                {"product_id": product_id},
                oldest_first("timestamp"),
            ),
            client.list(PROFILES),
        )
    except RemoteError as exc:
        return _failed("timeline", exc)

    resolved = resolve_event_parties(events, build_index(profiles))
    return ViewResult(records=assemble_timeline(resolved))


async def record_event(client, data):
    form = validate_event(data)
    return await client.insert(SUPPLY_CHAIN_EVENTS, form.model_dump())


async def submit_product(client, identity, data):
    form = validate_product(data)
    record = form.model_dump()
    record["created_by"] = identity.user_id
    row = await client.insert(PRODUCTS, record)
    logger.info("Product %s created by %s", row.get("id"), identity.user_id, extra={"user_id": identity.user_id})
    return row


async def submit_entry(client, identity, data, *, record_events=None):
    form = validate_entry(data)
    record = form.model_dump()
    record["user_id"] = identity.user_id
    row = await client.insert(ENTRY_PRODUCTS, record)
    logger.info("Entry %s recorded for batch %s", row.get("id"), row.get("batch_number"))

    if _should_record_events(record_events):
        await record_event(
            client,
            {
                "product_id": row.get("product_id"),
                "batch_number": row.get("batch_number"),
                "event_type": EVENT_ENTRY,
                "from_user": row.get("received_from") if is_set(row.get("received_from")) else None,
                "to_user": identity.user_id,
                "quantity": row.get("quantity"),
                "metadata": {"entry_product_id": row.get("id")},
            },
        )
    return row


async def submit_exit(client, identity, data, *, record_events=None):
    form = validate_exit(data)
    record = form.model_dump()
    record["user_id"] = identity.user_id
    row = await client.insert(EXIT_PRODUCTS, record)
    logger.info("Exit %s recorded from entry %s", row.get("id"), row.get("entry_product_id"))

    if _should_record_events(record_events):
        entries = await client.list(ENTRY_PRODUCTS, {"id": row.get("entry_product_id")}, limit=1)
        if not entries:
            logger.warning("Exit %s references missing entry %s; no event recorded", row.get("id"), row.get("entry_product_id"))
            return row
        entry = entries[0]
        await record_event(
            client,
            {
                "product_id": entry.get("product_id"),
                "batch_number": entry.get("batch_number"),
                "event_type": EVENT_EXIT,
                "from_user": identity.user_id,
                "to_user": row.get("assigned_to") if is_set(row.get("assigned_to")) else None,
                "quantity": row.get("quantity"),
                "metadata": {"exit_product_id": row.get("id")},
            },
        )
    return row


async def submit_usage(client, identity, data):
    form = validate_usage(data)
    record = form.model_dump()
    record["user_id"] = identity.user_id
    return await client.insert(USED_TODAY, record)


def _should_record_events(record_events):
    if record_events is None:
        return get_settings().RECORD_SUPPLY_CHAIN_EVENTS
    return record_events


__all__ = [
    "ViewResult",
    "load_entries",
    "load_exits",
    "load_products",
    "load_timeline",
    "load_usage",
    "record_event",
    "submit_entry",
    "submit_exit",
    "submit_product",
    "submit_usage",
]
