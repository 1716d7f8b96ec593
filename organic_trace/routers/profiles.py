from fastapi import APIRouter, Depends

from organic_trace.core.constants import PROFILES
from organic_trace.core.security import Identity, get_identity
from organic_trace.dependencies import get_table_client
from organic_trace.services.role_service import load_profile, load_role, permissions_for

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("")
async def list_profiles(_identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    rows = await client.list(PROFILES)
    return {
        "count": len(rows),
        "results": [{"id": row.get("id"), "full_name": row.get("full_name")} for row in rows],
    }


@router.get("/me")
async def my_profile(identity: Identity = Depends(get_identity), client=Depends(get_table_client)):
    profile = await load_profile(client, identity.user_id)
    role = await load_role(client, identity.user_id)
    return {
        "user_id": identity.user_id,
        "profile": profile,
        "role": role,
        "permissions": permissions_for(role),
    }
