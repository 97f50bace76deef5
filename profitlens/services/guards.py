from dataclasses import dataclass

from profitlens.services.snapshot import Snapshot


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a refusable delete: an expected user error, not an exception."""
    success: bool
    message: str | None = None


OK = GuardResult(success=True)


def ingredient_deletable(snap: Snapshot, ingredient_id: str) -> GuardResult:
    if any(r.ingredient_id == ingredient_id for r in snap.recipes):
        return GuardResult(False, "This ingredient is still used in a recipe. Remove it from the recipe first.")
    return OK


def outlet_deletable(snap: Snapshot, outlet_id: str, selected_outlet_id: str | None) -> GuardResult:
    if len(snap.outlets) <= 1:
        return GuardResult(False, "Cannot delete the only outlet.")
    if outlet_id == selected_outlet_id:
        return GuardResult(False, "Cannot delete the outlet that is currently selected. Switch to another outlet first.")
    has_data = (
        any(i.outlet_id == outlet_id for i in snap.ingredients)
        or any(s.outlet_id == outlet_id for s in snap.sales)
        or any(c.outlet_id == outlet_id for c in snap.costs)
    )
    if has_data:
        return GuardResult(False, "This outlet has related data (inventory, sales, costs) and cannot be deleted.")
    return OK
