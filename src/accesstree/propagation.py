"""Checked-state propagation over a NodeStore.

Provides:
- ``downward()`` — cascade an explicit toggle into a subtree.
- ``upward()`` — recompute the ancestor chain of a node, bottom-up.
- ``aggregate()`` — recompute one parent from its direct children.
- ``reconcile()`` — recompute every internal node, deepest first.

All functions are pure: they read a store snapshot and return new nodes
(or a new store); nothing is mutated in place.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from .models import Node
from .store import NodeStore

logger = logging.getLogger(__name__)


def downward(start: Node, checked: bool, store: NodeStore) -> dict[str, Node]:
    """Cascade ``checked`` from ``start`` into its enabled subtree.

    A disabled node keeps its state and its children are not visited,
    so nothing below a disabled node is touched either. Every visited
    node gets ``checked`` and loses ``indeterminate``.

    Returns:
        Only the nodes whose state actually changed, keyed by id.
    """
    updates: dict[str, Node] = {}
    visited: set[str] = set()
    queue: deque[Node] = deque([start])

    while queue:
        node = queue.popleft()
        if node.id in visited:
            continue
        visited.add(node.id)
        if node.disabled:
            continue

        if node.checked != checked or node.indeterminate:
            updates[node.id] = node.with_state(checked=checked, indeterminate=False)

        queue.extend(store.children_of(node.id))

    return updates


def aggregate(parent_id: str, store: NodeStore) -> Optional[Node]:
    """Recompute a parent's checked/indeterminate/disabled flags.

    - ``disabled`` is set iff the parent has children and all are disabled.
    - With no enabled children, ``checked`` mirrors whether every child is
      checked and ``indeterminate`` is cleared.
    - Otherwise only enabled children count: all checked means checked;
      any checked or indeterminate child short of that means indeterminate.

    Returns:
        The recomputed parent, or ``None`` if ``parent_id`` is unknown.
    """
    parent = store.get(parent_id)
    if parent is None:
        logger.debug("Cannot aggregate unknown node %r", parent_id)
        return None

    children = store.children_of(parent_id)
    active = [child for child in children if not child.disabled]
    all_disabled = bool(children) and not active

    if not active:
        return parent.with_state(
            disabled=all_disabled,
            checked=bool(children) and all(child.checked for child in children),
            indeterminate=False,
        )

    checked_count = sum(1 for child in active if child.checked)
    indeterminate_count = sum(1 for child in active if child.indeterminate)
    all_checked = checked_count == len(active)
    none_selected = checked_count == 0 and indeterminate_count == 0

    return parent.with_state(
        disabled=all_disabled,
        checked=all_checked,
        indeterminate=not all_checked and not none_selected,
    )


def upward(node_id: str, store: NodeStore) -> dict[str, Node]:
    """Recompute every ancestor of ``node_id``, nearest first.

    Each ancestor is computed from the already-recomputed state of the
    one below it. The node itself is not recomputed.

    Returns:
        The ancestors whose state changed, keyed by id.
    """
    updates: dict[str, Node] = {}
    current = store.get(node_id)
    if current is None:
        logger.debug("Upward pass from unknown node %r skipped", node_id)
        return updates

    view = store
    seen = {node_id}
    while current.parent is not None and current.parent not in seen:
        recomputed = aggregate(current.parent, view)
        if recomputed is None:
            break
        seen.add(recomputed.id)
        if recomputed != view[recomputed.id]:
            updates[recomputed.id] = recomputed
            view = view.merge({recomputed.id: recomputed})
        current = recomputed

    return updates


def _depth(node_id: str, store: NodeStore) -> int:
    return len(store.ancestors(node_id))


def reconcile(store: NodeStore) -> NodeStore:
    """Recompute every internal node from its children, leaves upward.

    Internal nodes are processed deepest first, so each parent sees the
    final state of all its children.
    """
    internal = [node_id for node_id, node in store.items() if not node.is_leaf]
    internal.sort(key=lambda node_id: _depth(node_id, store), reverse=True)

    view = store
    for node_id in internal:
        recomputed = aggregate(node_id, view)
        if recomputed is not None and recomputed != view[node_id]:
            view = view.merge({node_id: recomputed})
    return view


__all__ = [
    "aggregate",
    "downward",
    "reconcile",
    "upward",
]
