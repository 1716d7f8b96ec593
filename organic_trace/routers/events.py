from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from organic_trace.core.security import Identity, get_identity
from organic_trace.dependencies import get_table_client
from organic_trace.services.view_service import record_event

router = APIRouter(prefix="/events", tags=["Supply Chain"])


@router.post("", status_code=201)
async def create_event(
    payload: Dict[str, Any] = Body(...),
    _identity: Identity = Depends(get_identity),
    client=Depends(get_table_client),
):
    return {"created": await record_event(client, payload)}
