"""
Tests for predicate evaluation and query chains.

Tests cover:
- Operator semantics (length ordering, membership, strict equality)
- Misuse errors
- AND/OR chain composition against live collection data
"""

import pytest

from slashdb.db import Db, QueryChain, is_match
from slashdb.errors import ConfigurationError


class TestOrdering:
    """Tests for >, <, >=, <=."""

    def test_arrays_compare_by_length(self):
        assert is_match({"a": [1, 2, 3]}, "a", ">", [1, 2]) is True
        assert is_match({"a": [9]}, "a", ">", [1, 2]) is False

    def test_strings_compare_by_length(self):
        assert is_match({"a": "hi"}, "a", ">", "h") is True
        # Lexically "b" > "aa"; by length it is shorter.
        assert is_match({"a": "b"}, "a", "<", "aa") is True
        assert is_match({"a": "abc"}, "a", "<=", "zzz") is True

    def test_numbers_compare_natively(self):
        assert is_match({"a": 5}, "a", ">", 3) is True
        assert is_match({"a": 3}, "a", ">=", 3) is True
        assert is_match({"a": 2}, "a", "<=", 1) is False
        assert is_match({"a": 2.5}, "a", "<", 3) is True

    def test_kind_mismatch_never_matches(self):
        assert is_match({"a": 5}, "a", ">", "3") is False
        assert is_match({"a": "abc"}, "a", ">", ["x"]) is False


class TestMembership:
    """Tests for in / not."""

    def test_scalar_in_array(self):
        assert is_match({"a": 2}, "a", "in", [1, 2, 3]) is True
        assert is_match({"a": 4}, "a", "in", [1, 2, 3]) is False

    def test_array_intersection(self):
        assert is_match({"a": [2, 5]}, "a", "in", [5, 9]) is True
        assert is_match({"a": [2, 5]}, "a", "in", [6, 7]) is False

    def test_not_negates_in(self):
        assert is_match({"a": 3}, "a", "not", [1, 2]) is True
        assert is_match({"a": 2}, "a", "not", [1, 2]) is False
        assert is_match({"a": [2, 5]}, "a", "not", [6, 7]) is True

    def test_membership_uses_strict_kinds(self):
        assert is_match({"a": True}, "a", "in", [1]) is False
        assert is_match({"a": "1"}, "a", "in", [1]) is False

    def test_non_array_value_raises(self):
        with pytest.raises(ConfigurationError, match="requires compare value of Array"):
            is_match({"a": 2}, "a", "in", 2)
        with pytest.raises(ConfigurationError):
            is_match({"a": 2}, "a", "not", "2")

    def test_non_array_value_raises_even_without_field(self):
        with pytest.raises(ConfigurationError):
            is_match({}, "a", "in", 2)


class TestEquality:
    """Tests for == / !=."""

    def test_deep_equality(self):
        assert is_match({"a": [1, 2]}, "a", "==", [1, 2]) is True
        assert is_match({"a": [1, 2]}, "a", "==", [2, 1]) is False
        assert is_match({"a": [1, 2]}, "a", "!=", [2, 1]) is True
        assert is_match({"a": "x"}, "a", "==", "x") is True
        assert is_match({"a": "x"}, "a", "!=", "x") is False

    def test_array_against_scalar_raises(self):
        with pytest.raises(ConfigurationError, match="did you mean to use \"in\""):
            is_match({"a": [1, 2]}, "a", "==", 1)
        with pytest.raises(ConfigurationError, match="did you mean to use \"not\""):
            is_match({"a": [1, 2]}, "a", "!=", 1)

    def test_scalar_against_array_is_false(self):
        assert is_match({"a": 1}, "a", "==", [1]) is False

    def test_strict_kinds(self):
        assert is_match({"a": True}, "a", "==", 1) is False
        assert is_match({"a": 1}, "a", "==", "1") is False


class TestNonMatchingRows:
    """Rows and fields that can never match."""

    def test_mapping_field(self):
        assert is_match({"a": {"b": 1}}, "a", "==", {"b": 1}) is False

    def test_missing_field(self):
        assert is_match({}, "a", "==", 1) is False
        assert is_match({}, "a", "not", [1]) is False

    def test_null_field(self):
        assert is_match({"a": None}, "a", "==", None) is False

    def test_non_mapping_row(self):
        assert is_match("text", "a", "==", 1) is False

    def test_unknown_operator(self):
        assert is_match({"a": 1}, "a", "~=", 1) is False
        assert is_match({"a": 1}, "a", "in ", [1]) is False


ALICE = {"name": "Alice", "age": 31, "role": "admin", "tags": ["a", "b"]}
BOB = {"name": "Bob", "age": 17, "role": "user", "tags": []}
CAROL = {"name": "Carol", "age": 45, "role": "user", "tags": ["c"]}


@pytest.fixture
def db():
    return Db({"users": {"alice": dict(ALICE), "bob": dict(BOB), "carol": dict(CAROL)}})


class TestQueryChain:
    """Tests for Collection.where() chains."""

    def test_where(self, db):
        chain = db.collection("users").where("age", ">=", 18)
        assert isinstance(chain, QueryChain)
        assert chain.get() == [ALICE, CAROL]

    def test_and(self, db):
        result = db.collection("users").where("age", ">=", 18).and_("role", "==", "user").get()
        assert result == [CAROL]

    def test_or(self, db):
        result = db.collection("users").where("role", "==", "admin").or_("age", "<", 18).get()
        assert result == [ALICE, BOB]

    def test_mixed_chain(self, db):
        result = (
            db.collection("users")
            .where("tags", "in", ["a", "c"])
            .and_("age", ">", 40)
            .or_("name", "==", "Bob")
            .get()
        )
        assert result == [BOB, CAROL]

    def test_get_is_idempotent(self, db):
        chain = db.collection("users").where("age", ">", 20)
        assert chain.get() == chain.get() == [ALICE, CAROL]
        assert len(chain) == 2
        assert chain.keys() == ["alice", "carol"]

    def test_steps_recorded(self, db):
        chain = db.collection("users").where("age", ">", 20).or_("role", "==", "user")
        assert chain.steps == [
            ("where", "age", ">", 20),
            ("or", "role", "==", "user"),
        ]

    def test_each_step_sees_current_documents(self, db):
        """Documents added between steps are evaluated by later steps."""
        chain = db.collection("users").where("age", ">", 40)
        dave = {"name": "Dave", "age": 50, "role": "user"}
        db.tree["users"]["dave"] = dave

        chain.or_("role", "==", "user")

        assert chain.get() == [BOB, CAROL, dave]

    def test_unseen_document_fails_and(self, db):
        chain = db.collection("users").where("age", ">", 40)
        db.tree["users"]["dave"] = {"name": "Dave", "age": 50}

        chain.and_("age", ">", 40)

        assert chain.get() == [CAROL]

    def test_removed_document_dropped(self, db):
        chain = db.collection("users").where("age", ">", 20)
        del db.tree["users"]["carol"]
        assert chain.get() == [ALICE]

    def test_misuse_raises_at_step(self, db):
        users = db.collection("users")
        with pytest.raises(ConfigurationError):
            users.where("age", "in", 18)
        with pytest.raises(ConfigurationError):
            users.where("age", ">", 0).and_("tags", "==", "a")

    def test_non_mapping_documents_skipped(self):
        db = Db({"things": {"x": 1, "y": {"n": 1}, "z": ["n"]}})
        assert db.collection("things").where("n", "==", 1).get() == [{"n": 1}]

    def test_empty_collection(self):
        assert Db().collection("users").where("age", ">", 1).get() == []

    def test_misuse_raises_on_empty_collection(self):
        """Operand misuse raises even when there are no documents to test."""
        users = Db().collection("users")
        with pytest.raises(ConfigurationError, match="requires compare value of Array"):
            users.where("age", "in", 18)
        with pytest.raises(ConfigurationError):
            users.where("age", ">", 1).or_("tags", "not", "admin")
