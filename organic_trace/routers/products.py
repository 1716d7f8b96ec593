from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from organic_trace.core.security import Identity
from organic_trace.dependencies import get_table_client, require_product_manager
from organic_trace.routers._views import view_payload
from organic_trace.services.view_service import load_products, submit_product

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("")
async def list_products(
    identity: Identity = Depends(require_product_manager),
    client=Depends(get_table_client),
):
    return view_payload(await load_products(client, identity.user_id))


@router.post("", status_code=201)
async def create_product(
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(require_product_manager),
    client=Depends(get_table_client),
):
    created = await submit_product(client, identity, payload)
    view = view_payload(await load_products(client, identity.user_id))
    return {"created": created, **view}
