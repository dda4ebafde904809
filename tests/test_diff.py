"""
Tests for structural diff trees.
"""

import pytest

from inspector.diff import DiffLeaf, DiffNode, diff, is_leaf, normalize


class TestDiff:
    """Test the recursive diff."""

    def test_identical_inputs_have_empty_diff(self):
        data = {"name": "web", "run_list": ["recipe[nginx]"], "attrs": {"port": 80}}
        result = diff(data, dict(data))

        assert not result
        assert result.to_dict() == {}

    def test_leaf_mismatch(self):
        result = diff({"x": 1, "y": 2}, {"x": 3, "y": 2})

        assert result.to_dict() == {"x": {"server": 1, "local": 3}}
        leaf = result.children["x"]
        assert isinstance(leaf, DiffLeaf)
        assert leaf.server != leaf.local

    def test_missing_key_on_either_side(self):
        result = diff({"only_server": 1}, {"only_local": 2})

        assert result.to_dict() == {
            "only_server": {"server": 1, "local": None},
            "only_local": {"server": None, "local": 2},
        }

    def test_key_missing_against_none_is_reported(self):
        result = diff({"description": None}, {})

        assert result
        assert result.to_dict() == {"description": {"server": None, "local": None}}
        assert diff({}, {"description": None}).to_dict() == {"description": {"server": None, "local": None}}

    def test_none_on_both_sides_is_equal(self):
        assert not diff({"description": None}, {"description": None})

    def test_nested_mappings_recurse(self):
        server = {"default_attributes": {"nginx": {"port": 80, "user": "www"}}}
        local = {"default_attributes": {"nginx": {"port": 8080, "user": "www"}}}

        result = diff(server, local)

        assert result.to_dict() == {
            "default_attributes": {"nginx": {"port": {"server": 80, "local": 8080}}}
        }
        assert isinstance(result.children["default_attributes"], DiffNode)

    def test_mapping_against_scalar_is_a_leaf(self):
        result = diff({"a": {"b": 1}}, {"a": "flat"})

        assert result.to_dict() == {"a": {"server": {"b": 1}, "local": "flat"}}

    def test_key_order_is_server_first(self):
        result = diff({"b": 1, "a": 1}, {"c": 1, "a": 2})

        assert list(result.children) == ["b", "a", "c"]


class TestDiffNodeParsing:
    """Test building trees from serialized mappings."""

    def test_leaf_requires_exactly_server_and_local(self):
        assert is_leaf({"server": 1, "local": 2})
        assert not is_leaf({"server": 1})
        assert not is_leaf({"server": 1, "local": 2, "other": 3})

    def test_from_dict_round_trips_structure(self):
        data = {"a": {"server": 1, "local": 2}, "b": {"c": {"server": "x", "local": "y"}}}

        node = DiffNode.from_dict(data)

        assert isinstance(node.children["a"], DiffLeaf)
        assert isinstance(node.children["b"], DiffNode)
        assert node.to_dict() == data

    def test_mapping_with_extra_keys_is_a_node(self):
        node = DiffNode.from_dict(
            {"a": {"server": {"server": 1, "local": 2}, "local": {"server": 3, "local": 4}, "extra": {"server": 5, "local": 6}}}
        )

        assert isinstance(node.children["a"], DiffNode)
        assert set(node.children["a"].children) == {"server", "local", "extra"}

    def test_from_dict_rejects_scalars(self):
        with pytest.raises(ValueError):
            DiffNode.from_dict({"a": 1})


def test_normalize_produces_json_types():
    assert normalize({1: ("a", "b")}) == {"1": ["a", "b"]}
    assert normalize(None) is None
