import importlib

from organic_trace.models.entry_product import EntryProduct
from organic_trace.models.exit_product import ExitProduct
from organic_trace.models.product import Product
from organic_trace.models.profile import Profile
from organic_trace.models.supply_chain_event import SupplyChainEvent
from organic_trace.models.used_today import UsedToday
from organic_trace.models.user_role import UserRole


def import_all_models() -> None:
    for module_name in (
        "organic_trace.models.entry_product",
        "organic_trace.models.exit_product",
        "organic_trace.models.product",
        "organic_trace.models.profile",
        "organic_trace.models.supply_chain_event",
        "organic_trace.models.used_today",
        "organic_trace.models.user_role",
    ):
        importlib.import_module(module_name)


__all__ = [
    "EntryProduct",
    "ExitProduct",
    "Product",
    "Profile",
    "SupplyChainEvent",
    "UsedToday",
    "UserRole",
    "import_all_models",
]
