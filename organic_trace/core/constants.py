PRODUCTS = "products"
ENTRY_PRODUCTS = "entry_products"
EXIT_PRODUCTS = "exit_products"
USED_TODAY = "used_today"
PROFILES = "profiles"
USER_ROLES = "user_roles"
SUPPLY_CHAIN_EVENTS = "supply_chain_events"

TABLES = (
    PRODUCTS,
    ENTRY_PRODUCTS,
    EXIT_PRODUCTS,
    USED_TODAY,
    PROFILES,
    USER_ROLES,
    SUPPLY_CHAIN_EVENTS,
)

UNKNOWN_PRODUCT = "Unknown product"
UNKNOWN_USER = "Unknown user"

ROLES = ("farmer", "manufacturer", "distributor", "retailer", "consumer")
PRODUCT_MANAGER_ROLES = frozenset({"farmer", "manufacturer"})
USAGE_ROLES = frozenset({"retailer", "consumer"})

EVENT_ENTRY = "entry"
EVENT_EXIT = "exit"
