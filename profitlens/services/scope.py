from dataclasses import dataclass

from profitlens.services.snapshot import (
    CampaignRow, CostRow, IngredientRow, MenuItemRow, OrderRow, RecipeRow,
    SaleRow, Snapshot, SupplierPriceRow, SupplierRow, WasteRow,
)


@dataclass(frozen=True)
class OutletView:
    """One outlet's slice of a snapshot; the catalog parts stay global."""
    outlet_id: str
    ingredients: tuple[IngredientRow, ...]
    sales: tuple[SaleRow, ...]
    costs: tuple[CostRow, ...]
    waste: tuple[WasteRow, ...]
    orders: tuple[OrderRow, ...]
    # global
    menu_items: tuple[MenuItemRow, ...]
    recipes: tuple[RecipeRow, ...]
    suppliers: tuple[SupplierRow, ...]
    supplier_prices: tuple[SupplierPriceRow, ...]
    campaign: CampaignRow | None
    all_sales: tuple[SaleRow, ...]  # campaign performance reads across outlets


def scope_to_outlet(snap: Snapshot, outlet_id: str) -> OutletView:
    return OutletView(
        outlet_id=outlet_id,
        ingredients=tuple(i for i in snap.ingredients if i.outlet_id == outlet_id),
        sales=tuple(s for s in snap.sales if s.outlet_id == outlet_id),
        costs=tuple(c for c in snap.costs if c.outlet_id == outlet_id),
        waste=tuple(w for w in snap.waste if w.outlet_id == outlet_id),
        orders=tuple(o for o in snap.orders if o.outlet_id == outlet_id),
        menu_items=snap.menu_items,
        recipes=snap.recipes,
        suppliers=snap.suppliers,
        supplier_prices=snap.supplier_prices,
        campaign=snap.campaign,
        all_sales=snap.sales,
    )
