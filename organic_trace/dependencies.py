from functools import lru_cache

from fastapi import Depends, HTTPException, status

from organic_trace.config import get_settings
from organic_trace.core.errors import RemoteError
from organic_trace.core.security import Identity, get_identity
from organic_trace.database.engine import engine
from organic_trace.services.rest_client import RestTableClient
from organic_trace.services.role_service import can_manage_products, can_record_usage, load_role
from organic_trace.services.sql_client import SqlTableClient


@lru_cache
def _sql_client():
    return SqlTableClient(engine)


def _rest_client(access_token=None):
    settings = get_settings()
    try:
        return RestTableClient(
            settings.REST_URL,
            settings.REST_API_KEY,
            access_token=access_token,
            timeout=settings.REST_TIMEOUT_SECONDS,
        )
    except RemoteError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=exc.message,
        ) from exc


def build_table_client(access_token=None):
    backend = get_settings().TABLE_BACKEND.strip().lower()
    if backend == "rest":
        return _rest_client(access_token)
    if backend == "sql":
        return _sql_client()
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unsupported TABLE_BACKEND: {}".format(backend),
    )


def get_table_client(identity: Identity = Depends(get_identity)):
    return build_table_client(identity.access_token)


def get_public_table_client():
    return build_table_client()


async def require_product_manager(
    identity: Identity = Depends(get_identity),
    client=Depends(get_table_client),
) -> Identity:
    role = await load_role(client, identity.user_id)
    if not can_manage_products(role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only farmers and manufacturers can manage products",
        )
    return identity


async def require_usage_role(
    identity: Identity = Depends(get_identity),
    client=Depends(get_table_client),
) -> Identity:
    role = await load_role(client, identity.user_id)
    if not can_record_usage(role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only retailers and consumers can record usage",
        )
    return identity


__all__ = [
    "build_table_client",
    "get_identity",
    "get_public_table_client",
    "get_table_client",
    "require_product_manager",
    "require_usage_role",
]
