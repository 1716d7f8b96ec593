from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from organic_trace.core.constants import ENTRY_PRODUCTS, PRODUCTS
from organic_trace.core.security import Identity, get_identity
from organic_trace.dependencies import get_table_client
from organic_trace.routers._views import view_payload
from organic_trace.services.assembler import product_name
from organic_trace.services.lookup import build_index
from organic_trace.services.qr_service import batch_qr_payload, qr_filename
from organic_trace.services.view_service import load_entries, submit_entry

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.get("")
async def list_entries(identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    return view_payload(await load_entries(client, identity.user_id))


@router.post("", status_code=201)
async def create_entry(
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(get_identity),
    client=Depends(get_table_client),
):
    created = await submit_entry(client, identity, payload)
    view = view_payload(await load_entries(client, identity.user_id))
    return {"created": created, **view}


@router.get("/{entry_id}/qr")
async def entry_qr(entry_id: str, identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    entries = await client.list(ENTRY_PRODUCTS, {"id": entry_id, "user_id": identity.user_id}, limit=1)
    if not entries:
        raise HTTPException(status_code=404, detail="Entry not found.")
    entry = entries[0]

    products = await client.list(PRODUCTS, {"id": entry.get("product_id")}, limit=1) if entry.get("product_id") else []
    name = product_name(build_index(products), entry.get("product_id"))
    return {
        "batch_number": entry.get("batch_number"),
        "product_name": name,
        "payload": batch_qr_payload(entry.get("batch_number"), name),
        "filename": qr_filename(entry.get("batch_number")),
    }
