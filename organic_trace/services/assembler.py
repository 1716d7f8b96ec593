"""Client-side joins that turn flat table rows into display records.

Each view record is a copy of its source row plus resolved display fields.
A reference that is unset leaves its display field out entirely; a reference
that is set but does not resolve gets the matching "Unknown ..." sentinel.
"""

from organic_trace.core.constants import UNKNOWN_PRODUCT, UNKNOWN_USER
from organic_trace.services.lookup import lookup


def is_set(reference) -> bool:
    return reference is not None and reference != ""


def display_name(index, reference, field, fallback):
    row = lookup(index, reference) if is_set(reference) else None
    if row is None:
        return fallback
    name = row.get(field)
    if name is None or name == "":
        return fallback
    return name


def product_name(product_index, product_id):
    return display_name(product_index, product_id, "name", UNKNOWN_PRODUCT)


def user_name(profile_index, user_id):
    return display_name(profile_index, user_id, "full_name", UNKNOWN_USER)


def assemble_entries(entry_rows, product_index, profile_index):
    views = []
    for row in entry_rows:
        view = dict(row)
        view["product_name"] = product_name(product_index, row.get("product_id"))
        received_from = row.get("received_from")
        if is_set(received_from):
            view["source_name"] = user_name(profile_index, received_from)
        views.append(view)
    return views


def assemble_exits(exit_rows, entry_index, product_index, profile_index):
    views = []
    for row in exit_rows:
        view = dict(row)
        entry_product_id = row.get("entry_product_id")
        entry = lookup(entry_index, entry_product_id) if is_set(entry_product_id) else None
        # Without the entry hop there is no product hop either.
        if entry is not None:
            view["batch_number"] = entry.get("batch_number")
            view["product_name"] = product_name(product_index, entry.get("product_id"))
        assigned_to = row.get("assigned_to")
        if is_set(assigned_to):
            view["assignee_name"] = user_name(profile_index, assigned_to)
        views.append(view)
    return views


def assemble_usage(usage_rows, entry_index, product_index):
    views = []
    for row in usage_rows:
        view = dict(row)
        entry_product_id = row.get("entry_product_id")
        entry = lookup(entry_index, entry_product_id) if is_set(entry_product_id) else None
        if entry is None:
            view["product_name"] = UNKNOWN_PRODUCT
        else:
            view["product_name"] = product_name(product_index, entry.get("product_id"))
        views.append(view)
    return views


__all__ = [
    "assemble_entries",
    "assemble_exits",
    "assemble_usage",
    "display_name",
    "is_set",
    "product_name",
    "user_name",
]
