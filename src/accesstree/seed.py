"""Static definitions of the Standard, Unix and Dbsec account trees.

Only leaf states are meaningful here. Checked flags on internal nodes
are recomputed from their children when the store is built.
"""

from __future__ import annotations

from typing import Optional

from .models import Node, NodeSeed, TreeName

# ── Tree roots ──────────────────────────────────────────

SEED_TREES: dict[TreeName, tuple[str, ...]] = {
    TreeName.STANDARD: ("finance", "hr"),
    TreeName.UNIX: ("linux-servers", "aix-servers"),
    TreeName.DBSEC: ("sql-db", "nosql-db"),
}

TREE_TITLES: dict[TreeName, str] = {
    TreeName.STANDARD: "Standard Accounts",
    TreeName.UNIX: "Unix Accounts",
    TreeName.DBSEC: "Database Security Accounts",
}


# ── Nodes ───────────────────────────────────────────────

SEED_NODES: tuple[NodeSeed, ...] = (
    # Standard: Finance
    NodeSeed(id="finance", label="Finance", children=("finance-read", "finance-edit")),
    NodeSeed(
        id="finance-read",
        label="Read Access",
        children=("finance-read-reports", "finance-read-budgets"),
    ),
    NodeSeed(id="finance-read-reports", label="Financial Reports"),
    NodeSeed(id="finance-read-budgets", label="Department Budgets"),
    NodeSeed(
        id="finance-edit",
        label="Edit Access",
        children=("finance-edit-payroll", "finance-edit-invoices"),
    ),
    NodeSeed(id="finance-edit-payroll", label="Payroll", disabled=True),
    NodeSeed(id="finance-edit-invoices", label="Invoices"),
    # Standard: Human Resources
    NodeSeed(id="hr", label="Human Resources", checked=True, children=("hr-view", "hr-edit")),
    NodeSeed(id="hr-view", label="View Access", children=("hr-view-profiles",)),
    NodeSeed(id="hr-view-profiles", label="Employee Profiles"),
    NodeSeed(id="hr-edit", label="Edit Access", checked=True, children=("hr-edit-onboarding",)),
    NodeSeed(id="hr-edit-onboarding", label="Onboarding", checked=True),
    # Unix: Linux
    NodeSeed(
        id="linux-servers",
        label="Linux Servers",
        checked=True,
        children=("linux-admin", "linux-user"),
    ),
    NodeSeed(
        id="linux-admin",
        label="Administrator",
        checked=True,
        children=("linux-admin-prod", "linux-admin-dev"),
    ),
    NodeSeed(id="linux-admin-prod", label="Production Servers", checked=True),
    NodeSeed(id="linux-admin-dev", label="Development Servers", disabled=True),
    NodeSeed(id="linux-user", label="Standard User", children=("linux-user-all",)),
    NodeSeed(id="linux-user-all", label="All Servers"),
    # Unix: AIX
    NodeSeed(id="aix-servers", label="AIX Servers", children=("aix-readonly",)),
    NodeSeed(id="aix-readonly", label="Read-Only", disabled=True, children=("aix-readonly-prod",)),
    NodeSeed(id="aix-readonly-prod", label="Production", disabled=True),
    # Dbsec: SQL
    NodeSeed(id="sql-db", label="SQL Databases", children=("sql-query", "sql-admin")),
    NodeSeed(
        id="sql-query",
        label="Query Access",
        children=("sql-query-customer", "sql-query-product"),
    ),
    NodeSeed(id="sql-query-customer", label="Customer Database"),
    NodeSeed(id="sql-query-product", label="Product Database"),
    NodeSeed(id="sql-admin", label="Admin Access", children=("sql-admin-test", "sql-admin-prod")),
    NodeSeed(id="sql-admin-test", label="Test Database"),
    NodeSeed(id="sql-admin-prod", label="Production Database", disabled=True),
    # Dbsec: NoSQL
    NodeSeed(id="nosql-db", label="NoSQL Databases", children=("nosql-readonly",)),
    NodeSeed(id="nosql-readonly", label="Read-Only", children=("nosql-readonly-analytics",)),
    NodeSeed(id="nosql-readonly-analytics", label="Analytics Store"),
)


# ── Restriction messages ────────────────────────────────
# Shown next to disabled leaves.

DEFAULT_RESTRICTION_REASON = "Access is restricted"

RESTRICTION_REASONS: dict[str, str] = {
    "finance-edit-payroll": "This access requires additional approval",
    "linux-admin-dev": "Access currently restricted",
    "aix-readonly-prod": "System upgrade in progress",
    "sql-admin-prod": "Requires security clearance",
}


def restriction_reason(node: Node) -> Optional[str]:
    """Explain why a disabled leaf cannot be selected.

    Returns ``None`` for enabled nodes and for internal nodes, which are
    disabled only as a consequence of their children.
    """
    if not node.disabled or not node.is_leaf:
        return None
    return RESTRICTION_REASONS.get(node.id, DEFAULT_RESTRICTION_REASON)


__all__ = [
    "DEFAULT_RESTRICTION_REASON",
    "RESTRICTION_REASONS",
    "SEED_NODES",
    "SEED_TREES",
    "TREE_TITLES",
    "restriction_reason",
]
