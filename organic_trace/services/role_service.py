from organic_trace.core.constants import PRODUCT_MANAGER_ROLES, PROFILES, USAGE_ROLES, USER_ROLES


async def load_role(client, user_id):
    rows = await client.list(USER_ROLES, {"user_id": user_id}, limit=1)
    if not rows:
        return None
    return rows[0].get("role")


async def load_profile(client, user_id):
    rows = await client.list(PROFILES, {"id": user_id}, limit=1)
    return rows[0] if rows else None


def can_manage_products(role) -> bool:
    return role in PRODUCT_MANAGER_ROLES


def can_record_usage(role) -> bool:
    return role in USAGE_ROLES


def permissions_for(role):
    return {
        "manage_products": can_manage_products(role),
        "record_entries": True,
        "record_exits": True,
        "record_usage": can_record_usage(role),
    }
