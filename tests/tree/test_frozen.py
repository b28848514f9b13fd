"""
Tests for read-only views (FrozenMapping, FrozenSequence, freeze, thaw).

Untyped reads hand these views out so callers cannot alter loaded sources
or cached merge results.
"""

import pytest as _pytest

import postfix_bundle.tree as tree

FrozenMapping = tree.FrozenMapping
FrozenSequence = tree.FrozenSequence


class TestFrozenMapping:
    """Tests for FrozenMapping."""

    def test_getitem_returns_value(self) -> None:
        fm = FrozenMapping({"a": 1, "b": 2})

        assert fm["a"] == 1
        assert len(fm) == 2
        assert set(fm) == {"a", "b"}

    def test_missing_key_raises_keyerror(self) -> None:
        fm = FrozenMapping({"a": 1})

        with _pytest.raises(KeyError):
            _ = fm["missing"]

    def test_item_assignment_rejected(self) -> None:
        fm = FrozenMapping({"a": 1})

        with _pytest.raises(TypeError):
            fm["a"] = 2  # type: ignore[index]

    def test_nested_values_are_frozen(self) -> None:
        fm = FrozenMapping({"database": {"ports": [5432]}})

        assert isinstance(fm["database"], FrozenMapping)
        assert isinstance(fm["database"]["ports"], FrozenSequence)

    def test_equals_plain_dict(self) -> None:
        assert FrozenMapping({"a": [1]}) == {"a": [1]}
        assert FrozenMapping({"a": 1}) == FrozenMapping({"a": 1})

    def test_unhashable(self) -> None:
        with _pytest.raises(TypeError):
            hash(FrozenMapping({}))


class TestFrozenSequence:
    """Tests for FrozenSequence."""

    def test_index_and_len(self) -> None:
        fs = FrozenSequence(["server1", "server2"])

        assert fs[1] == "server2"
        assert len(fs) == 2

    def test_slice_stays_frozen(self) -> None:
        fs = FrozenSequence([1, 2, 3])

        assert isinstance(fs[:2], FrozenSequence)
        assert fs[:2] == [1, 2]

    def test_item_assignment_rejected(self) -> None:
        fs = FrozenSequence([1])

        with _pytest.raises(TypeError):
            fs[0] = 2  # type: ignore[index]

    def test_equals_list_but_not_string(self) -> None:
        assert FrozenSequence(["a", "b"]) == ["a", "b"]
        assert FrozenSequence(["a", "b"]) != "ab"


class TestFreezeThaw:
    """Tests for freeze() and thaw()."""

    def test_freeze_passes_scalars_through(self) -> None:
        assert tree.freeze("text") == "text"
        assert tree.freeze(None) is None
        assert tree.freeze(5) == 5

    def test_freeze_is_idempotent(self) -> None:
        fm = tree.freeze({"a": 1})

        assert tree.freeze(fm) is fm

    def test_thaw_returns_independent_copy(self) -> None:
        original = {"servers": ["a"], "db": {"port": 1}}
        plain = tree.thaw(tree.freeze(original))

        plain["servers"].append("b")
        plain["db"]["port"] = 2

        assert isinstance(plain, dict)
        assert isinstance(plain["servers"], list)
        assert original == {"servers": ["a"], "db": {"port": 1}}
