"""NodeStore: the id-indexed snapshot every algorithm operates on.

Nodes reference each other by id only. A store is never mutated after
construction; ``merge()`` returns a new snapshot and leaves the receiver
untouched, so a caller holding an old store keeps a consistent view.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from .exceptions import CyclicTreeError, SeedDataError, UnknownNodeReferenceError
from .models import Node, NodeSeed, TreeName

logger = logging.getLogger(__name__)


# ---- Seed defects -----------------------------------------------------------

UNKNOWN_CHILD = "unknown_child"
UNKNOWN_PARENT = "unknown_parent"
UNKNOWN_ROOT = "unknown_root"
CYCLE = "cycle"
SHARED = "shared"
ORPHAN = "orphan"
PARENT_MISMATCH = "parent_mismatch"

_UNKNOWN_KINDS = frozenset({UNKNOWN_CHILD, UNKNOWN_PARENT, UNKNOWN_ROOT})


@dataclass(frozen=True)
class SeedDefect:
    """One structural problem found in the node mapping."""

    kind: str
    node_id: str
    ref: Optional[str] = None

    def __str__(self) -> str:
        if self.ref is None:
            return f"{self.kind}: {self.node_id}"
        return f"{self.kind}: {self.node_id} -> {self.ref}"


def _raise_for_defects(defects: Sequence[SeedDefect]) -> None:
    kinds = {d.kind for d in defects}
    if kinds & _UNKNOWN_KINDS:
        raise UnknownNodeReferenceError(defects=list(defects))
    if CYCLE in kinds:
        raise CyclicTreeError(defects=list(defects))
    raise SeedDataError(defects=list(defects))


# ---- Store ------------------------------------------------------------------


class NodeStore(Mapping[str, Node]):
    """Immutable mapping from node id to Node, shared by all three trees."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Mapping[str, Node] | Iterable[Node] = ()) -> None:
        if isinstance(nodes, Mapping):
            self._nodes: dict[str, Node] = dict(nodes)
        else:
            self._nodes = {node.id: node for node in nodes}

    def __getitem__(self, node_id: str) -> Node:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"NodeStore({len(self._nodes)} nodes)"

    # ---- lookup ----

    def children_of(self, node_id: str) -> list[Node]:
        """Resolve a node's children in declared order.

        Unknown ids (the node itself or any child) are skipped.
        """
        node = self._nodes.get(node_id)
        if node is None or not node.children:
            return []
        resolved = []
        for child_id in node.children:
            child = self._nodes.get(child_id)
            if child is None:
                logger.debug("Skipping unknown child %r of %r", child_id, node_id)
                continue
            resolved.append(child)
        return resolved

    def parent_of(self, node_id: str) -> Optional[Node]:
        node = self._nodes.get(node_id)
        if node is None or node.parent is None:
            return None
        parent = self._nodes.get(node.parent)
        if parent is None:
            logger.debug("Skipping unknown parent %r of %r", node.parent, node_id)
        return parent

    def ancestors(self, node_id: str) -> list[Node]:
        """Return the ancestor chain of a node, nearest first."""
        chain: list[Node] = []
        seen = {node_id}
        parent = self.parent_of(node_id)
        while parent is not None and parent.id not in seen:
            chain.append(parent)
            seen.add(parent.id)
            parent = self.parent_of(parent.id)
        return chain

    def merge(self, updates: Mapping[str, Node]) -> "NodeStore":
        """Return a new store with ``updates`` applied."""
        if not updates:
            return self
        merged = dict(self._nodes)
        merged.update(updates)
        return NodeStore(merged)

    # ---- validation ----

    def validate(self, trees: Mapping[TreeName, Sequence[str]]) -> list[SeedDefect]:
        """Check that the mapping is a forest rooted at ``trees``.

        Args:
            trees: Ordered root-id sequences, one per tree.

        Returns:
            Every defect found, in discovery order. Empty means consistent.
        """
        defects: list[SeedDefect] = []

        for node in self._nodes.values():
            for child_id in node.children or ():
                if child_id not in self._nodes:
                    defects.append(SeedDefect(UNKNOWN_CHILD, node.id, child_id))
            if node.parent is not None:
                parent = self._nodes.get(node.parent)
                if parent is None:
                    defects.append(SeedDefect(UNKNOWN_PARENT, node.id, node.parent))
                elif node.id not in (parent.children or ()):
                    defects.append(SeedDefect(PARENT_MISMATCH, node.id, node.parent))

        reached: set[str] = set()

        def visit(node_id: str, path: tuple[str, ...]) -> None:
            if node_id in path:
                defects.append(SeedDefect(CYCLE, path[-1], node_id))
                return
            if node_id in reached:
                defects.append(SeedDefect(SHARED, node_id, path[-1] if path else None))
                return
            reached.add(node_id)
            node = self._nodes[node_id]
            for child_id in node.children or ():
                if child_id in self._nodes:
                    visit(child_id, path + (node_id,))

        for roots in trees.values():
            for root_id in roots:
                if root_id not in self._nodes:
                    defects.append(SeedDefect(UNKNOWN_ROOT, str(root_id)))
                    continue
                visit(root_id, ())

        for node_id in self._nodes:
            if node_id not in reached:
                defects.append(SeedDefect(ORPHAN, node_id))

        return defects

    # ---- construction ----

    @classmethod
    def from_seed(
        cls,
        trees: Mapping[TreeName, Sequence[str]],
        seeds: Iterable[NodeSeed],
        strict: bool = False,
    ) -> "NodeStore":
        """Build a reconciled store from declarative seed entries.

        Phase 1 lays out raw nodes, deriving ``parent`` and ``level`` from
        each node's position under its root. Phase 2 recomputes every
        internal node from its children, deepest first, so that declared
        states on internal nodes never survive verbatim.

        Args:
            trees: Ordered root-id sequences, one per tree.
            seeds: One entry per node, in any order.
            strict: Raise on seed defects instead of logging them.

        Raises:
            SeedDataError: If ``strict`` and the seed is not a forest.
        """
        from .propagation import reconcile

        by_id: dict[str, NodeSeed] = {}
        for seed in seeds:
            if seed.id in by_id:
                logger.warning("Duplicate seed id %r, keeping the last definition", seed.id)
            by_id[seed.id] = seed

        placement: dict[str, tuple[Optional[str], int]] = {}

        def place(node_id: str, parent_id: Optional[str], level: int, path: frozenset[str]) -> None:
            if node_id in placement or node_id in path or node_id not in by_id:
                return
            placement[node_id] = (parent_id, level)
            for child_id in by_id[node_id].children or ():
                place(child_id, node_id, level + 1, path | {node_id})

        for roots in trees.values():
            for root_id in roots:
                place(root_id, None, 1, frozenset())

        raw: dict[str, Node] = {}
        for node_id, seed in by_id.items():
            parent_id, level = placement.get(node_id, (None, 1))
            raw[node_id] = Node(
                id=seed.id,
                label=seed.label,
                checked=seed.checked,
                disabled=seed.disabled,
                children=seed.children,
                parent=parent_id,
                level=level,
            )

        store = cls(raw)
        defects = store.validate(trees)
        if defects:
            if strict:
                _raise_for_defects(defects)
            for defect in defects:
                logger.warning("Seed defect %s", defect)

        reconciled = reconcile(store)
        logger.debug("Built store with %d nodes across %d trees", len(reconciled), len(trees))
        return reconciled


__all__ = [
    "NodeStore",
    "SeedDefect",
]
