"""
Process-wide workspace state.

Holds the current snapshot together with the user's view settings: the
selected outlet, the reporting window, the comparison toggle and the ids of
notifications already read. Every mutation runs as a command through
`Workspace.mutate`: write, commit, then reload the whole snapshot.
"""
import logging
import threading
from typing import Any, Callable, TypeVar

from profitlens.config import settings
from profitlens.services.costing import CostedMenuItem, cost_menu_items
from profitlens.services.scope import OutletView, scope_to_outlet
from profitlens.services.snapshot import Snapshot, load_snapshot
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _same(key: tuple, memo: tuple | None) -> bool:
    return memo is not None and key[0] is memo[0] and key[1] == memo[1]


class Workspace:
    def __init__(self, window_days: int | None = None):
        self._lock = threading.RLock()
        self.snapshot: Snapshot | None = None
        self.selected_outlet_id: str | None = None
        self.window_days = window_days or settings.DEFAULT_WINDOW_DAYS
        self.comparing = False
        self.read_ids: set[str] = set()
        # keyed on the snapshot object itself, not its id()
        self._view_key: tuple | None = None
        self._view: OutletView | None = None
        self._costed_key: tuple | None = None
        self._costed: list[CostedMenuItem] = []

    # ── snapshot ────────────────────────────────────────────────────────────

    def current(self, store: EntityStore) -> Snapshot:
        with self._lock:
            if self.snapshot is None:
                self.reload(store)
            return self.snapshot

    def reload(self, store: EntityStore) -> Snapshot:
        with self._lock:
            snap = load_snapshot(store)
            ids = [o.id for o in snap.outlets]
            if self.selected_outlet_id not in ids:
                # first outlet by creation, or nothing to select
                self.selected_outlet_id = ids[0] if ids else None
            self.snapshot = snap
            return snap

    def mutate(self, store: EntityStore, command: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run one write command in a single transaction and refresh the snapshot."""
        with self._lock:
            try:
                result = command(store, *args, **kwargs)
                store.commit()
            except Exception:
                store.rollback()
                logger.warning("command %s rolled back", getattr(command, "__name__", command))
                raise
            self.reload(store)
            return result

    # ── derived views ───────────────────────────────────────────────────────

    def view(self, store: EntityStore) -> OutletView | None:
        with self._lock:
            snap = self.current(store)
            if self.selected_outlet_id is None:
                return None
            key = (snap, self.selected_outlet_id)
            if not _same(key, self._view_key):
                self._view = scope_to_outlet(snap, self.selected_outlet_id)
                self._view_key = key
            return self._view

    def costed(self, store: EntityStore) -> list[CostedMenuItem]:
        """Menu items costed against the selected outlet's ingredient prices."""
        with self._lock:
            view = self.view(store)
            if view is None:
                snap = self.current(store)
                return cost_menu_items(snap.menu_items, snap.recipes, ())
            key = (self.snapshot, view.outlet_id)
            if not _same(key, self._costed_key):
                self._costed = cost_menu_items(view.menu_items, view.recipes, view.ingredients)
                self._costed_key = key
            return self._costed

    # ── settings ────────────────────────────────────────────────────────────

    def select_outlet(self, store: EntityStore, outlet_id: str) -> bool:
        with self._lock:
            if not any(o.id == outlet_id for o in self.current(store).outlets):
                return False
            self.selected_outlet_id = outlet_id
            logger.info("outlet %s selected", outlet_id)
            return True

    def configure(self, window_days: int | None = None, comparing: bool | None = None) -> None:
        with self._lock:
            if window_days is not None:
                if window_days <= 0:
                    raise ValueError("window_days must be positive")
                self.window_days = window_days
            if comparing is not None:
                self.comparing = comparing

    def mark_read(self, ids) -> set[str]:
        with self._lock:
            self.read_ids |= set(ids)
            return set(self.read_ids)
