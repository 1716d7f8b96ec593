from fastapi import APIRouter, Depends, HTTPException, Query

from organic_trace.dependencies import get_public_table_client
from organic_trace.services.trace_service import trace_batch, trace_product

router = APIRouter(prefix="/trace", tags=["Trace"])


def _trace_payload(result):
    return {"product": result.product, "count": len(result.events), "events": result.events}


@router.get("/batch/{batch_number}")
async def trace_by_batch(batch_number: str, client=Depends(get_public_table_client)):
    try:
        result = await trace_batch(client, batch_number)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _trace_payload(result)


@router.get("/product")
async def trace_by_product(
    name: str = Query("", description="Product name (partial, case-insensitive)"),
    client=Depends(get_public_table_client),
):
    try:
        result = await trace_product(client, name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _trace_payload(result)
