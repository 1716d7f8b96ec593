from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from organic_trace.core.security import Identity, get_identity
from organic_trace.dependencies import get_table_client
from organic_trace.routers._views import view_payload
from organic_trace.services.view_service import load_exits, submit_exit

router = APIRouter(prefix="/exits", tags=["Exits"])


@router.get("")
async def list_exits(identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    return view_payload(await load_exits(client, identity.user_id))


@router.post("", status_code=201)
async def create_exit(
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(get_identity),
    client=Depends(get_table_client),
):
    created = await submit_exit(client, identity, payload)
    view = view_payload(await load_exits(client, identity.user_id))
    return {"created": created, **view}
