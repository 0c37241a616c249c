"""Shared fixtures for accesstree tests."""

from __future__ import annotations

import pytest

from accesstree import AccessTreeConfig, AccountTreeState, Node, NodeStore


@pytest.fixture
def seeded_state() -> AccountTreeState:
    """Product trees built from the static seed."""
    return AccountTreeState.from_seed(AccessTreeConfig(strict_seed_validation=True))


def make_store(*nodes: Node) -> NodeStore:
    """Build an unreconciled store from explicit nodes."""
    return NodeStore(nodes)
