from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from organic_trace.core.security import Identity
from organic_trace.dependencies import get_table_client, require_usage_role
from organic_trace.routers._views import view_payload
from organic_trace.services.view_service import load_usage, submit_usage

router = APIRouter(prefix="/usage", tags=["Usage"])


@router.get("")
async def list_usage(identity: Identity = Depends(require_usage_role), client=Depends(get_table_client)):
    return view_payload(await load_usage(client, identity.user_id))


@router.post("", status_code=201)
async def create_usage(
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(require_usage_role),
    client=Depends(get_table_client),
):
    created = await submit_usage(client, identity, payload)
    view = view_payload(await load_usage(client, identity.user_id))
    return {"created": created, **view}
