"""State-update entry point for the account selection UI.

``apply_toggle()`` is the pure sequence run on every toggle:
downward cascade, upward reconciliation, then a full recomputation of
the selected leaves. ``AccountTreeState`` holds the current snapshot and
publishes a new one after each completed sequence; it is meant to be
driven from a single thread, one event at a time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from .config import AccessTreeConfig, load_config_from_env
from .logging import get_tree_logger, safe_preview
from .models import Node, TreeName
from .propagation import downward, upward
from .search import FilteredTree, filter_forest
from .seed import SEED_NODES, SEED_TREES
from .selection import SelectionSummary, checked_leaves
from .store import NodeStore

logger = get_tree_logger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of one toggle or remove."""

    store: NodeStore
    selected_leaf_nodes: tuple[Node, ...]
    changed_ids: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.changed_ids)


def apply_toggle(
    trees: Mapping[TreeName, Sequence[str]],
    store: NodeStore,
    node_id: str,
    checked: bool,
) -> ToggleResult:
    """Set ``node_id`` to ``checked`` and reconcile the whole store.

    Unknown and disabled nodes are a no-op: the same store comes back.
    """
    node = store.get(node_id)
    if node is None:
        logger.debug("Toggle ignored: unknown node", node_id=node_id)
        return ToggleResult(store, tuple(checked_leaves(trees, store)))
    if node.disabled:
        logger.debug("Toggle ignored: node is disabled", node_id=node_id)
        return ToggleResult(store, tuple(checked_leaves(trees, store)))

    cascaded = downward(node, checked, store)
    after_down = store.merge(cascaded)
    reconciled = upward(node_id, after_down)
    new_store = after_down.merge(reconciled)

    changed = tuple(dict.fromkeys([*cascaded, *reconciled]))
    logger.debug(
        "Toggled to %s: %d descendants, %d ancestors changed",
        checked,
        len(cascaded),
        len(reconciled),
        node_id=node_id,
    )
    return ToggleResult(new_store, tuple(checked_leaves(trees, new_store)), changed)


class AccountTreeState:
    """Current selection snapshot for the three account trees."""

    def __init__(
        self,
        trees: Mapping[TreeName, Sequence[str]],
        store: NodeStore,
        search_term: str = "",
    ) -> None:
        self.trees: dict[TreeName, tuple[str, ...]] = {name: tuple(roots) for name, roots in trees.items()}
        self.store = store
        self.search_term = search_term
        self.selected_leaf_nodes: tuple[Node, ...] = tuple(checked_leaves(self.trees, store))

    @classmethod
    def from_seed(cls, config: Optional[AccessTreeConfig] = None) -> "AccountTreeState":
        """Build the product trees from the static seed definitions."""
        if config is None:
            config = load_config_from_env()
        store = NodeStore.from_seed(SEED_TREES, SEED_NODES, strict=config.strict_seed_validation)
        return cls(SEED_TREES, store)

    def _publish(self, result: ToggleResult) -> ToggleResult:
        self.store = result.store
        self.selected_leaf_nodes = result.selected_leaf_nodes
        return result

    def toggle(self, node_id: str, checked: bool) -> ToggleResult:
        """Check or uncheck a node, cascading down and reconciling up."""
        return self._publish(apply_toggle(self.trees, self.store, node_id, checked))

    def remove(self, node_id: str) -> ToggleResult:
        """Drop a node from the selection; same as ``toggle(node_id, False)``."""
        return self.toggle(node_id, False)

    def search(self, query: Optional[str]) -> dict[TreeName, FilteredTree]:
        """Filtered forest for ``query``. Selection state is not affected."""
        return filter_forest(self.trees, self.store, query)

    def set_search_term(self, term: Optional[str]) -> None:
        self.search_term = term or ""
        logger.debug("Search term set to %r", safe_preview(self.search_term, limit=80))

    def visible_trees(self) -> dict[TreeName, FilteredTree]:
        """Filtered forest for the stored search term."""
        return self.search(self.search_term)

    def summary(self) -> SelectionSummary:
        return SelectionSummary(self.selected_leaf_nodes)

    def node(self, node_id: str) -> Optional[Node]:
        return self.store.get(node_id)


__all__ = [
    "AccountTreeState",
    "ToggleResult",
    "apply_toggle",
]
