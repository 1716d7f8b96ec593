from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from organic_trace.core.security import Identity, get_identity
from organic_trace.dependencies import get_table_client
from organic_trace.services.analytics_service import build_report, collect_analytics, report_filename

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("")
async def analytics_summary(_identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    return await collect_analytics(client)


@router.get("/report")
async def analytics_report(_identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    report = build_report(await collect_analytics(client))
    return JSONResponse(
        content=report,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(report_filename())},
    )
