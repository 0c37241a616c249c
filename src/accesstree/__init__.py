from .config import AccessTreeConfig, LogLevel, load_config_from_env
from .coordinator import AccountTreeState, ToggleResult, apply_toggle
from .exceptions import (
    AccessTreeError,
    ConfigurationError,
    CyclicTreeError,
    SeedDataError,
    UnknownNodeReferenceError,
)
from .logging import (
    AccessTreeFormatter,
    NodeLoggerAdapter,
    get_tree_logger,
    safe_preview,
    setup_logging,
)
from .models import Node, NodeSeed, TreeName
from .propagation import aggregate, downward, reconcile, upward
from .search import FilteredTree, filter_forest, filter_tree, find_matches
from .seed import SEED_NODES, SEED_TREES, TREE_TITLES, restriction_reason
from .selection import SelectionSummary, checked_leaves, leaves
from .store import NodeStore, SeedDefect

__all__ = [
    'AccessTreeConfig',
    'LogLevel',
    'load_config_from_env',
    'AccountTreeState',
    'ToggleResult',
    'apply_toggle',
    'AccessTreeError',
    'ConfigurationError',
    'CyclicTreeError',
    'SeedDataError',
    'UnknownNodeReferenceError',
    'AccessTreeFormatter',
    'NodeLoggerAdapter',
    'get_tree_logger',
    'safe_preview',
    'setup_logging',
    'Node',
    'NodeSeed',
    'TreeName',
    'aggregate',
    'downward',
    'reconcile',
    'upward',
    'FilteredTree',
    'filter_forest',
    'filter_tree',
    'find_matches',
    'SEED_NODES',
    'SEED_TREES',
    'TREE_TITLES',
    'restriction_reason',
    'SelectionSummary',
    'checked_leaves',
    'leaves',
    'NodeStore',
    'SeedDefect',
]
