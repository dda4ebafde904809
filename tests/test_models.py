"""
Tests for items, validation and run results.
"""

import pytest

from inspector.diff import DiffNode
from inspector.models import (
    Item,
    PresenceItem,
    RunResult,
    MISSING_EVERYWHERE,
    MISSING_LOCALLY,
    MISSING_ON_SERVER,
)
from inspector.reconciler import reconcile


class TestItem:
    """Test generic item validation."""

    def test_matching_item_passes(self):
        item = Item(name="web", server={"a": 1}, local={"a": 1}).validate()

        assert item.errors == []
        assert item.passed is True

    def test_missing_locally(self):
        item = Item(name="a", server={"a": 1}, local=None).validate()

        assert item.errors == [MISSING_LOCALLY]
        assert item.passed is False

    def test_missing_on_server(self):
        item = Item(name="c", server=None, local={"a": 1}).validate()

        assert item.errors == [MISSING_ON_SERVER]

    def test_missing_everywhere(self):
        item = Item(name="ghost").validate()

        assert item.errors == [MISSING_EVERYWHERE]

    def test_mismatch_produces_diff_tree(self):
        item = Item(name="web", server={"port": 80}, local={"port": 8080}).validate()

        assert len(item.errors) == 1
        assert isinstance(item.errors[0], DiffNode)
        assert item.errors[0].to_dict() == {"port": {"server": 80, "local": 8080}}

    def test_key_absent_locally_fails_even_when_server_value_is_none(self):
        item = Item(name="web", server={"name": "web", "description": None}, local={"name": "web"}).validate()

        assert item.passed is False
        assert item.errors[0].to_dict() == {"description": {"server": None, "local": None}}

    def test_tuples_and_lists_compare_equal(self):
        item = Item(name="web", server={"run_list": ["a", "b"]}, local={"run_list": ("a", "b")}).validate()

        assert item.passed

    def test_pending_item_cannot_be_reported(self):
        item = Item(name="web", server={}, local={})

        with pytest.raises(ValueError, match="pending"):
            item.passed
        with pytest.raises(ValueError):
            item.to_dict()

    def test_validate_only_once(self):
        item = Item(name="web", server={}, local={}).validate()

        with pytest.raises(RuntimeError):
            item.validate()

    def test_to_dict(self):
        item = Item(name="web", server={"x": 1}, local={"x": 2}).validate()

        assert item.to_dict() == {
            "name": "web",
            "server": {"x": 1},
            "local": {"x": 2},
            "errors": [{"x": {"server": 1, "local": 2}}],
        }

    def test_validation_is_idempotent_across_items(self):
        first = Item(name="web", server={"x": {"y": 1}}, local={"x": {"y": 2}}).validate()
        second = Item(name="web", server={"x": {"y": 1}}, local={"x": {"y": 2}}).validate()

        assert first.to_dict() == second.to_dict()


class TestPresenceItem:
    """Test existence-only items."""

    def test_content_is_ignored(self):
        item = PresenceItem(name="bag", server={"a": 1}, local={"a": 2}).validate()

        assert item.passed

    def test_absence_still_reported(self):
        item = PresenceItem(name="bag", server=None, local={"name": "bag"}).validate()

        assert item.errors == [MISSING_ON_SERVER]


class TestRunResult:
    """Test the pass accumulator."""

    def test_empty_run_passes(self):
        result = RunResult(checklist="roles")

        assert result.all_passed is True
        assert result.total == 0

    def test_any_failure_fails_the_run(self):
        result = RunResult(checklist="roles")
        result.record(Item(name="a", server={}, local={}).validate())
        result.record(Item(name="b", server={}, local=None).validate())

        assert result.all_passed is False
        assert result.total == 2
        assert result.failed == 1


class TestReconcile:
    """Test name reconciliation."""

    def test_sorted_unique_union(self):
        assert reconcile({"b", "a"}, {"c", "b"}) == ["a", "b", "c"]

    def test_empty_inputs(self):
        assert reconcile(set(), set()) == []

    def test_accepts_any_iterable(self):
        remote = ["z", "y", "z"]
        local = iter(["a", "y"])

        assert reconcile(remote, local) == sorted(set(remote) | {"a", "y"})

    def test_lexicographic_order(self):
        assert reconcile({"B", "a"}, {"_default", "10", "9"}) == ["10", "9", "B", "_default", "a"]
