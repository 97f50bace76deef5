import logging

from profitlens.models.core import Outlet
from profitlens.services.guards import GuardResult, outlet_deletable
from profitlens.services.snapshot import Snapshot
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)


def clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("outlet name must not be blank")
    return name


def add_outlet(store: EntityStore, name: str) -> Outlet:
    row = store.insert(Outlet, {"name": clean_name(name)})
    logger.info("outlet %r added", row.name)
    return row


def rename_outlet(store: EntityStore, outlet_id: str, name: str) -> Outlet | None:
    return store.update(Outlet, outlet_id, {"name": clean_name(name)})


def delete_outlet(store: EntityStore, snap: Snapshot, outlet_id: str, selected_outlet_id: str | None) -> GuardResult:
    verdict = outlet_deletable(snap, outlet_id, selected_outlet_id)
    if verdict.success:
        store.delete(Outlet, outlet_id)
        logger.info("outlet %s deleted", outlet_id)
    return verdict
