import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from organic_trace.config import Settings, get_settings
from organic_trace.core.errors import RemoteError, TraceNotFound, ValidationError
from organic_trace.core.logging import setup_logging
from organic_trace.database import Base, engine
from organic_trace.models import import_all_models
from organic_trace.routers import (
    analytics_router,
    entries_router,
    events_router,
    exits_router,
    health_router,
    products_router,
    profiles_router,
    trace_router,
    usage_router,
)

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger("organic_trace.requests")

import_all_models()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.TABLE_BACKEND.strip().lower() == "sql":
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

if settings.cors_origins():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    logger.info("%s %s %s %sms", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(_request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content=exc.as_dict())


@app.exception_handler(RemoteError)
async def remote_error_handler(request: Request, exc: RemoteError):
    detail = "Failed to load data" if request.method in ("GET", "HEAD") else "Failed to save record"
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=502, content={"detail": detail})


@app.exception_handler(TraceNotFound)
async def trace_not_found_handler(_request: Request, exc: TraceNotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message})


app.include_router(health_router)
app.include_router(profiles_router)
app.include_router(products_router)
app.include_router(entries_router)
app.include_router(exits_router)
app.include_router(usage_router)
app.include_router(events_router)
app.include_router(trace_router)
app.include_router(analytics_router)


__all__ = ["app"]
