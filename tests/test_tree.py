"""Tests for nested tree helpers."""

from slashdb.utils.tree import deep_equal, deep_merge, get_in, set_in


class TestGetIn:
    """Tests for get_in()."""

    def test_dot_and_slash_paths(self):
        tree = {"a": {"b": {"c": 1}}}
        assert get_in(tree, "a.b.c") == 1
        assert get_in(tree, "a/b/c") == 1
        assert get_in(tree, "./a/b") == {"c": 1}

    def test_missing_returns_default(self):
        tree = {"a": {"b": 1}}
        assert get_in(tree, "a.x") is None
        assert get_in(tree, "a.x", default="d") == "d"

    def test_cannot_descend_into_scalar(self):
        assert get_in({"a": 5}, "a.b") is None


class TestSetIn:
    """Tests for set_in()."""

    def test_creates_intermediate_mappings(self):
        tree: dict = {}
        set_in(tree, "users.alice.age", 31)
        assert tree == {"users": {"alice": {"age": 31}}}

    def test_keeps_siblings(self):
        tree = {"users": {"bob": {"age": 17}}}
        set_in(tree, "users/alice", {"age": 31})
        assert tree == {"users": {"bob": {"age": 17}, "alice": {"age": 31}}}

    def test_replaces_scalar_intermediate(self):
        tree = {"a": 1}
        set_in(tree, "a.b", 2)
        assert tree == {"a": {"b": 2}}


class TestDeepMerge:
    """Tests for deep_merge()."""

    def test_newer_fragment_wins(self):
        """Older x.y=1, newer x.y=2 and x.z=3 -> x.y=2, x.z=3."""
        older = {"x": {"y": 1}}
        newer = {"x": {"y": 2, "z": 3}}
        assert deep_merge({}, older, newer) == {"x": {"y": 2, "z": 3}}

    def test_keeps_keys_only_in_older(self):
        merged = deep_merge({}, {"x": {"a": 1, "b": 2}}, {"x": {"b": 3}})
        assert merged == {"x": {"a": 1, "b": 3}}

    def test_arrays_replaced_not_concatenated(self):
        merged = deep_merge({}, {"tags": [1, 2]}, {"tags": [3]})
        assert merged == {"tags": [3]}

    def test_mapping_replaces_scalar_and_back(self):
        assert deep_merge({}, {"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}
        assert deep_merge({}, {"a": {"b": 2}}, {"a": 5}) == {"a": 5}

    def test_does_not_alias_sources(self):
        source = {"x": {"y": 1}, "tags": [1]}
        merged = deep_merge({}, source)
        merged["x"]["y"] = 99
        merged["tags"].append(2)
        assert source == {"x": {"y": 1}, "tags": [1]}


class TestDeepEqual:
    """Tests for deep_equal()."""

    def test_arrays_are_order_sensitive(self):
        assert deep_equal([1, 2], [1, 2]) is True
        assert deep_equal([1, 2], [2, 1]) is False
        assert deep_equal([1, 2], [1, 2, 3]) is False

    def test_mappings_ignore_key_order(self):
        assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1}) is True
        assert deep_equal({"a": 1}, {"a": 1, "b": 2}) is False

    def test_nested(self):
        assert deep_equal({"a": [1, {"b": True}]}, {"a": [1, {"b": True}]}) is True

    def test_strict_kinds(self):
        assert deep_equal(True, 1) is False
        assert deep_equal([True], [1]) is False
        assert deep_equal("1", 1) is False
        assert deep_equal(1, 1.0) is True
