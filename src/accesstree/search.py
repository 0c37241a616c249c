"""Label search over the account trees.

A non-empty query keeps every node whose label contains it
(case-insensitive) plus the ancestors needed to reach each match from
its root. Nothing else survives: siblings of a match and the children of
a match are dropped. Roots without a match are omitted entirely.

Pruned nodes are fresh copies with a restricted ``children`` tuple, held
in the result's own ``nodes`` table; the shared store is never touched.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .logging import get_tree_logger, safe_preview
from .models import Node, TreeName
from .store import NodeStore

logger = get_tree_logger(__name__)


@dataclass(frozen=True)
class FilteredTree:
    """Search result for one tree.

    ``roots`` are the visible root nodes in display order; ``nodes``
    resolves every visible node by id. For an empty query ``nodes`` is
    the original store and ``roots`` are the original root objects.
    """

    roots: tuple[Node, ...]
    nodes: Mapping[str, Node] = field(default_factory=dict)

    def children_of(self, node_id: str) -> list[Node]:
        node = self.nodes.get(node_id)
        if node is None or not node.children:
            return []
        return [self.nodes[child_id] for child_id in node.children if child_id in self.nodes]

    def visible_ids(self) -> list[str]:
        """Ids of all visible nodes, depth-first pre-order."""
        out: list[str] = []

        def walk(node: Node) -> None:
            out.append(node.id)
            for child in self.children_of(node.id):
                walk(child)

        for root in self.roots:
            walk(root)
        return out

    @property
    def is_empty(self) -> bool:
        return not self.roots


def normalize_query(query: Optional[str]) -> str:
    """Lower-case the query as typed; ``None`` counts as empty."""
    return (query or "").lower()


def find_matches(store: NodeStore, query: str) -> list[str]:
    """Ids of every node whose label contains ``query``, in store order."""
    needle = normalize_query(query)
    if not needle:
        return []
    return [node_id for node_id, node in store.items() if needle in node.label.lower()]


def _keep_set(store: NodeStore, matches: Sequence[str]) -> set[str]:
    keep = set(matches)
    for node_id in matches:
        keep.update(ancestor.id for ancestor in store.ancestors(node_id))
    return keep


def _prune(root_id: str, store: NodeStore, keep: set[str]) -> dict[str, Node]:
    pruned: dict[str, Node] = {}
    stack = [root_id]
    while stack:
        node_id = stack.pop()
        if node_id in pruned:
            continue
        node = store[node_id]
        if node.children is None:
            pruned[node_id] = node.with_state()
            continue
        kept = tuple(child_id for child_id in node.children if child_id in keep and child_id in store)
        pruned[node_id] = node.with_state(children=kept)
        stack.extend(reversed(kept))
    return pruned


def filter_tree(roots: Sequence[str], store: NodeStore, query: Optional[str]) -> FilteredTree:
    """Reduce one tree to the nodes matching ``query`` and their ancestors.

    Args:
        roots: Root ids of the tree, in display order.
        store: The authoritative node mapping (searched in full).
        query: Substring to look for in labels; empty means no filtering.

    Returns:
        A FilteredTree. Empty when nothing under these roots matches.
    """
    if not normalize_query(query):
        return FilteredTree(
            roots=tuple(store[root_id] for root_id in roots if root_id in store),
            nodes=store,
        )

    matches = find_matches(store, query or "")
    if not matches:
        return FilteredTree(roots=())

    keep = _keep_set(store, matches)
    nodes: dict[str, Node] = {}
    kept_roots: list[Node] = []
    for root_id in roots:
        if root_id not in keep or root_id not in store:
            continue
        nodes.update(_prune(root_id, store, keep))
        kept_roots.append(nodes[root_id])

    return FilteredTree(roots=tuple(kept_roots), nodes=nodes)


def filter_forest(
    trees: Mapping[TreeName, Sequence[str]],
    store: NodeStore,
    query: Optional[str],
) -> dict[TreeName, FilteredTree]:
    """Apply ``filter_tree`` to every tree, keeping tree order."""
    result: dict[TreeName, FilteredTree] = {}
    for name, roots in trees.items():
        filtered = filter_tree(roots, store, query)
        result[name] = filtered
        if normalize_query(query):
            logger.debug(
                "Search %r kept %d of %d roots",
                safe_preview(query, limit=80),
                len(filtered.roots),
                len(roots),
                tree=TreeName(name).value,
            )
    return result


__all__ = [
    "FilteredTree",
    "filter_forest",
    "filter_tree",
    "find_matches",
    "normalize_query",
]
