# Importing the module registers tables with Base for create_all()
from .core import (  # noqa: F401
    # Enums
    CostInterval, WasteReason,

    # Outlets & inventory
    Outlet, Ingredient,

    # Menu
    MenuItem, Recipe,

    # Sales, costs & waste
    SalesHistory, OperationalCost, WasteRecord,

    # Suppliers & purchasing
    Supplier, SupplierPrice, PendingOrder,

    # Marketing
    ActiveCampaign,

    # Users
    UserProfile,
)

__all__ = [
    "CostInterval", "WasteReason",
    "Outlet", "Ingredient",
    "MenuItem", "Recipe",
    "SalesHistory", "OperationalCost", "WasteRecord",
    "Supplier", "SupplierPrice", "PendingOrder",
    "ActiveCampaign",
    "UserProfile",
]
