from organic_trace.routers.analytics import router as analytics_router
from organic_trace.routers.entries import router as entries_router
from organic_trace.routers.events import router as events_router
from organic_trace.routers.exits import router as exits_router
from organic_trace.routers.health import router as health_router
from organic_trace.routers.products import router as products_router
from organic_trace.routers.profiles import router as profiles_router
from organic_trace.routers.trace import router as trace_router
from organic_trace.routers.usage import router as usage_router

__all__ = [
    "analytics_router",
    "entries_router",
    "events_router",
    "exits_router",
    "health_router",
    "products_router",
    "profiles_router",
    "trace_router",
    "usage_router",
]
