from fastapi import APIRouter, Depends

from organic_trace.config import Settings, get_settings
from organic_trace.core.dates import utc_now

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    backend = settings.TABLE_BACKEND.strip().lower()
    payload = {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "backend": backend,
        "time": utc_now().isoformat(),
    }
    if backend == "rest":
        payload["rest_configured"] = bool(settings.REST_URL and settings.REST_API_KEY)
    return payload
