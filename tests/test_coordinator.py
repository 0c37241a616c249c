"""Tests for the toggle/remove/search entry points."""

from __future__ import annotations

import os
from unittest.mock import patch

from accesstree import AccessTreeConfig, AccountTreeState, NodeStore, TreeName, apply_toggle


def _ids(nodes) -> list[str]:
    return [n.id for n in nodes]


class TestInitialState:
    """Tests for the reconciled seed state."""

    def test_hr_is_indeterminate(self, seeded_state: AccountTreeState) -> None:
        """Declared hr=checked is replaced by the derived partial state."""
        hr = seeded_state.node("hr")
        assert hr.checked is False
        assert hr.indeterminate is True

    def test_linux_servers_partial(self, seeded_state: AccountTreeState) -> None:
        """Administrator checked, Standard User unchecked."""
        assert seeded_state.node("linux-admin").checked is True
        assert seeded_state.node("linux-servers").indeterminate is True

    def test_aix_fully_disabled(self, seeded_state: AccountTreeState) -> None:
        """A subtree of disabled nodes disables its ancestors."""
        assert seeded_state.node("aix-readonly").disabled is True
        assert seeded_state.node("aix-servers").disabled is True
        assert seeded_state.node("aix-servers").checked is False

    def test_initial_selection(self, seeded_state: AccountTreeState) -> None:
        """Selected leaves are the checked, enabled ones."""
        assert _ids(seeded_state.selected_leaf_nodes) == ["hr-edit-onboarding", "linux-admin-prod"]

    def test_from_env_config(self) -> None:
        """Without a config the environment is consulted."""
        with patch.dict(os.environ, {}, clear=True):
            state = AccountTreeState.from_seed()
        assert state.summary().count == 2


class TestToggle:
    """Tests for toggle()."""

    def test_toggle_off_linux_admin(self, seeded_state: AccountTreeState) -> None:
        """Cascades to enabled children only and reconciles the root."""
        seeded_state.toggle("linux-admin", False)
        assert seeded_state.node("linux-admin").checked is False
        assert seeded_state.node("linux-admin-prod").checked is False
        dev = seeded_state.node("linux-admin-dev")
        assert dev.disabled is True
        assert dev.checked is False
        root = seeded_state.node("linux-servers")
        assert root.checked is False
        assert root.indeterminate is False
        assert _ids(seeded_state.selected_leaf_nodes) == ["hr-edit-onboarding"]

    def test_toggle_on_skips_disabled_leaf(self, seeded_state: AccountTreeState) -> None:
        """Checking Finance leaves Payroll (disabled) unchecked."""
        seeded_state.toggle("finance", True)
        assert seeded_state.node("finance-edit-payroll").checked is False
        assert seeded_state.node("finance-edit").checked is True
        assert seeded_state.node("finance").checked is True
        assert _ids(seeded_state.selected_leaf_nodes) == [
            "finance-read-reports",
            "finance-read-budgets",
            "finance-edit-invoices",
            "hr-edit-onboarding",
            "linux-admin-prod",
        ]

    def test_leaf_toggle_updates_ancestors(self, seeded_state: AccountTreeState) -> None:
        """Unchecking one leaf turns the root indeterminate."""
        seeded_state.toggle("finance", True)
        seeded_state.toggle("finance-edit-invoices", False)
        assert seeded_state.node("finance-edit").checked is False
        assert seeded_state.node("finance-edit").indeterminate is False
        assert seeded_state.node("finance").indeterminate is True

    def test_completing_selection_checks_root(self, seeded_state: AccountTreeState) -> None:
        """Checking the last unchecked branch makes the root checked."""
        seeded_state.toggle("hr-view-profiles", True)
        hr = seeded_state.node("hr")
        assert hr.checked is True
        assert hr.indeterminate is False

    def test_disabled_node_is_noop(self, seeded_state: AccountTreeState) -> None:
        """Toggling a disabled node returns the same store."""
        before = seeded_state.store
        result = seeded_state.toggle("linux-admin-dev", True)
        assert result.store is before
        assert not result.changed

    def test_unknown_node_is_noop(self, seeded_state: AccountTreeState) -> None:
        """Unknown ids return the same store."""
        before = seeded_state.store
        result = seeded_state.toggle("does-not-exist", True)
        assert result.store is before
        assert seeded_state.store is before

    def test_idempotent(self, seeded_state: AccountTreeState) -> None:
        """Two identical toggles equal one."""
        once = seeded_state.toggle("hr", True).store
        twice = seeded_state.toggle("hr", True)
        assert twice.store == once
        assert not twice.changed

    def test_changed_ids(self, seeded_state: AccountTreeState) -> None:
        """The result lists descendants and ancestors that changed."""
        result = seeded_state.toggle("sql-query", True)
        assert set(result.changed_ids) == {
            "sql-query",
            "sql-query-customer",
            "sql-query-product",
            "sql-db",
        }

    def test_previous_snapshot_untouched(self, seeded_state: AccountTreeState) -> None:
        """Older stores keep their state after a toggle."""
        before = seeded_state.store
        seeded_state.toggle("finance", True)
        assert before["finance"].checked is False


class TestApplyToggle:
    """Tests for the pure toggle function."""

    def test_pure(self, seeded_state: AccountTreeState) -> None:
        """apply_toggle does not publish anything."""
        store = seeded_state.store
        result = apply_toggle(seeded_state.trees, store, "nosql-db", True)
        assert isinstance(result.store, NodeStore)
        assert result.store["nosql-readonly-analytics"].checked is True
        assert seeded_state.store is store
        assert "nosql-readonly-analytics" in _ids(result.selected_leaf_nodes)


class TestRemove:
    """Tests for remove()."""

    def test_remove_selected_leaf(self, seeded_state: AccountTreeState) -> None:
        """Removing a selected leaf unchecks it and updates ancestors."""
        seeded_state.remove("hr-edit-onboarding")
        assert seeded_state.node("hr-edit-onboarding").checked is False
        assert seeded_state.node("hr-edit").checked is False
        assert seeded_state.node("hr").indeterminate is False
        assert _ids(seeded_state.selected_leaf_nodes) == ["linux-admin-prod"]

    def test_remove_matches_toggle_off(self) -> None:
        """remove(id) and toggle(id, False) give the same store."""
        config = AccessTreeConfig()
        a = AccountTreeState.from_seed(config)
        b = AccountTreeState.from_seed(config)
        a.remove("linux-admin")
        b.toggle("linux-admin", False)
        assert a.store == b.store

    def test_remove_disabled_is_noop(self, seeded_state: AccountTreeState) -> None:
        """Disabled nodes cannot be removed."""
        before = seeded_state.store
        seeded_state.remove("sql-admin-prod")
        assert seeded_state.store is before


class TestSearchState:
    """Tests for search through the coordinator."""

    def test_search_does_not_touch_selection(self, seeded_state: AccountTreeState) -> None:
        """Searching leaves checked state and selection alone."""
        store = seeded_state.store
        selected = seeded_state.selected_leaf_nodes
        seeded_state.search("payroll")
        assert seeded_state.store is store
        assert seeded_state.selected_leaf_nodes == selected

    def test_stored_search_term(self, seeded_state: AccountTreeState) -> None:
        """visible_trees() follows the stored term."""
        seeded_state.set_search_term("analytics")
        visible = seeded_state.visible_trees()
        assert visible[TreeName.DBSEC].visible_ids() == [
            "nosql-db",
            "nosql-readonly",
            "nosql-readonly-analytics",
        ]
        assert visible[TreeName.STANDARD].is_empty

    def test_clearing_search_term(self, seeded_state: AccountTreeState) -> None:
        """A cleared term shows every root again."""
        seeded_state.set_search_term("analytics")
        seeded_state.set_search_term(None)
        visible = seeded_state.visible_trees()
        assert [n.id for n in visible[TreeName.UNIX].roots] == ["linux-servers", "aix-servers"]

    def test_search_reflects_latest_state(self, seeded_state: AccountTreeState) -> None:
        """Filtered copies show state after toggles."""
        seeded_state.toggle("sql-query-customer", True)
        result = seeded_state.search("customer")
        assert result[TreeName.DBSEC].nodes["sql-query"].indeterminate is True


class TestSummary:
    """Tests for the selection summary."""

    def test_summary(self, seeded_state: AccountTreeState) -> None:
        """Summary mirrors the selected leaves."""
        summary = seeded_state.summary()
        assert summary.count == 2
        assert summary.headline == "2 accounts selected"
        assert summary.labels == ("Onboarding", "Production Servers")
