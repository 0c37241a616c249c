"""Selected-leaf derivation for the "selected accounts" summary."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .models import Node, TreeName
from .store import NodeStore


def leaves(trees: Mapping[TreeName, Sequence[str]], store: NodeStore) -> list[Node]:
    """Return every structural leaf, depth-first pre-order.

    Trees are walked in mapping order, roots in declared order, children
    in declared order. A node is a leaf iff it has no children entry;
    having only disabled children does not make a node a leaf.
    """
    found: list[Node] = []
    seen: set[str] = set()

    def walk(node: Node) -> None:
        if node.id in seen:
            return
        seen.add(node.id)
        if node.is_leaf:
            found.append(node)
            return
        for child in store.children_of(node.id):
            walk(child)

    for roots in trees.values():
        for root_id in roots:
            root = store.get(root_id)
            if root is not None:
                walk(root)
    return found


def checked_leaves(trees: Mapping[TreeName, Sequence[str]], store: NodeStore) -> list[Node]:
    """Leaves that are checked and enabled."""
    return [node for node in leaves(trees, store) if node.checked and not node.disabled]


@dataclass(frozen=True)
class SelectionSummary:
    """Read model behind the selected-accounts panel."""

    nodes: tuple[Node, ...]

    @property
    def count(self) -> int:
        return len(self.nodes)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(node.id for node in self.nodes)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(node.label for node in self.nodes)

    @property
    def headline(self) -> str:
        return f"{self.count} accounts selected"


__all__ = [
    "SelectionSummary",
    "checked_leaves",
    "leaves",
]
