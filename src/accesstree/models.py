"""Data model for the account permission trees.

These are frozen Pydantic models: every state change produces a new
``Node`` via ``with_state()`` and is merged into a new store snapshot.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TreeName(str, Enum):
    """The three fixed account trees, in display order."""

    STANDARD = "standard"
    UNIX = "unix"
    DBSEC = "dbsec"


class Node(BaseModel):
    """One permission unit in a tree.

    ``parent`` and ``children`` are ids, resolved through the NodeStore.
    ``children`` is ``None`` for terminal permissions.
    """

    model_config = {"frozen": True}

    id: str
    label: str = ""
    checked: bool = False
    indeterminate: bool = False
    disabled: bool = False
    children: Optional[tuple[str, ...]] = None
    parent: Optional[str] = None
    level: int = Field(default=1, ge=1)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def with_state(self, **changes: object) -> "Node":
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)


class NodeSeed(BaseModel):
    """Declarative seed entry for one node.

    Level and parent are derived from the position in the tree, never
    declared. Checked states declared on internal nodes are overwritten
    by reconciliation.
    """

    model_config = {"frozen": True}

    id: str
    label: str
    checked: bool = False
    disabled: bool = False
    children: Optional[tuple[str, ...]] = None


__all__ = [
    "Node",
    "NodeSeed",
    "TreeName",
]
