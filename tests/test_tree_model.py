"""Tests for the collapsible tree model."""

import pytest

from ydoc_inspector.tree import (
    ROOT,
    ExpansionState,
    LineRole,
    NodeKind,
    TreeModel,
    flatten,
    format_path,
    render,
)
from ydoc_inspector.values import to_json_value


def texts(model: TreeModel) -> list[str]:
    return [line.text for line in model.lines()]


NESTED = {"a": 1, "b": {"c": True}}


class TestExpansionState:
    """Tests for ExpansionState."""

    def test_default_applies_to_unknown_paths(self) -> None:
        assert ExpansionState().is_expanded(("x", 1)) is True
        assert ExpansionState(default=False).is_expanded(ROOT) is False

    def test_toggle_returns_new_value(self) -> None:
        state = ExpansionState()
        assert state.toggle(("a",)) is False
        assert state.toggle(("a",)) is True

    def test_toggle_twice_leaves_no_override(self) -> None:
        state = ExpansionState()
        state.toggle(("a",))
        state.toggle(("a",))
        assert state.snapshot() == {}

    def test_paths_are_independent(self) -> None:
        state = ExpansionState()
        state.toggle(("a",))
        assert state.is_expanded(("b",)) is True
        assert state.is_expanded(("a", "b")) is True

    def test_collapse_all_and_expand_all(self) -> None:
        state = ExpansionState()
        state.set_expanded(("a",), False)
        state.collapse_all()
        assert state.default is False
        assert state.snapshot() == {}
        state.expand_all()
        assert state.is_expanded(("a",)) is True

    def test_reset_restores_initial_default(self) -> None:
        state = ExpansionState(default=False)
        state.expand_all()
        state.toggle(("x",))
        state.reset()
        assert state.default is False
        assert state.snapshot() == {}


class TestRender:
    """Tests for render and flatten."""

    def test_empty_array(self) -> None:
        lines = flatten(render([]))

        assert len(lines) == 1
        assert lines[0].text == "[]"
        assert lines[0].role is LineRole.EMPTY
        assert lines[0].expandable is False

    def test_empty_object(self) -> None:
        assert [line.text for line in flatten(render({}))] == ["{}"]

    def test_scalar_root(self) -> None:
        lines = flatten(render("hello"))
        assert [line.text for line in lines] == ['"hello"']

    def test_nested_object_expanded(self) -> None:
        model = TreeModel(NESTED)

        assert texts(model) == ["{", '"a": 1,', '"b": {', '"c": true', "}", "}"]
        assert [line.depth for line in model.lines()] == [0, 1, 1, 2, 1, 0]

    def test_collapsing_child(self) -> None:
        model = TreeModel(NESTED)
        model.toggle(("b",))

        assert texts(model) == ["{", '"a": 1,', '"b": {...}', "}"]

    def test_toggle_twice_is_identity(self) -> None:
        model = TreeModel(NESTED)
        before = model.lines()
        model.toggle(("b",))
        model.toggle(("b",))
        assert model.lines() == before

    def test_collapsed_root(self) -> None:
        model = TreeModel([1, 2], ExpansionState(default=False))

        lines = model.lines()
        assert [line.text for line in lines] == ["[...]"]
        assert lines[0].role is LineRole.COLLAPSED
        assert lines[0].expanded is False

    def test_collapsed_nodes_have_no_children(self) -> None:
        node = render(NESTED, state=ExpansionState(default=False))
        assert node.kind is NodeKind.COLLAPSED
        assert node.children == []
        assert node.size == 2

    def test_array_children_have_no_keys(self) -> None:
        model = TreeModel(["x", None])
        assert texts(model) == ["[", '"x",', "null", "]"]

    def test_brackets_follow_container_type(self) -> None:
        model = TreeModel({"list": [1], "map": {"k": 1}}, ExpansionState(default=False))
        model.toggle(ROOT)
        assert texts(model) == ["{", '"list": [...],', '"map": {...}', "}"]

    def test_empty_key_label(self) -> None:
        assert texts(TreeModel({"": 1})) == ["{", '"": 1', "}"]

    def test_custom_elision_marker(self) -> None:
        model = TreeModel({"a": [1]}, elision_marker="…")
        model.toggle(("a",))
        assert texts(model)[1] == '"a": […]'

    def test_close_line_carries_comma_and_path(self) -> None:
        model = TreeModel({"a": {"x": 1}, "b": 2})
        close = model.lines()[3]

        assert close.role is LineRole.CLOSE
        assert close.path == ("a",)
        assert close.text == "},"
        assert close.key is None


class TestCommaPlacement:
    """A trailing comma appears iff the node is not the last sibling."""

    @pytest.mark.parametrize("default", [True, False])
    def test_every_kind_of_sibling(self, default: bool) -> None:
        value = [{"x": 1}, [], "s", [2], {"y": {"z": None}}]
        state = ExpansionState(default=default)
        state.set_expanded(ROOT, True)
        model = TreeModel(value, state)

        siblings = [
            line for line in model.lines()
            if line.depth == 1 and line.role is not LineRole.HEADER
        ]
        assert [line.comma for line in siblings] == [True, True, True, True, False]

    def test_comma_independent_of_expansion(self) -> None:
        model = TreeModel({"a": {"k": 1}, "b": 2})
        expanded_close = model.lines()[3]
        model.toggle(("a",))
        collapsed_row = model.lines()[1]

        assert expanded_close.comma is True
        assert collapsed_row.comma is True


class TestTreeModelQueries:
    """Tests for lookups, path resolution and text output."""

    def test_lookup(self) -> None:
        model = TreeModel({"items": [{"name": "x"}]})
        assert model.lookup(("items", 0, "name")) == "x"
        assert model.lookup(ROOT) == {"items": [{"name": "x"}]}

    def test_lookup_missing(self) -> None:
        model = TreeModel({"items": []})
        with pytest.raises(KeyError):
            model.lookup(("items", 0))

    def test_resolve_path(self) -> None:
        model = TreeModel({"items": [{"name": "x"}]})
        assert model.resolve_path("items/0/name") == ("items", 0, "name")
        assert model.resolve_path("/") == ROOT
        assert model.resolve_path("") == ROOT

    def test_resolve_digit_key_in_object(self) -> None:
        model = TreeModel({"0": {"1": True}})
        assert model.resolve_path("0/1") == ("0", "1")

    def test_resolve_missing(self) -> None:
        with pytest.raises(KeyError):
            TreeModel({"a": 1}).resolve_path("b")

    def test_container_paths(self) -> None:
        model = TreeModel({"a": {"b": [1]}, "c": [], "d": 2})
        assert list(model.container_paths()) == [ROOT, ("a",), ("a", "b")]

    def test_collapse_all_shows_only_root(self) -> None:
        model = TreeModel(NESTED)
        model.collapse_all()
        assert texts(model) == ["{...}"]
        model.expand_all()
        assert len(model.lines()) == 6

    def test_value_is_not_modified(self) -> None:
        value = {"a": [1, 2]}
        model = TreeModel(value)
        model.toggle(("a",))
        model.lines()
        assert value == {"a": [1, 2]}

    def test_plain_text(self) -> None:
        model = TreeModel({"a": 1, "b": [2]})
        model.toggle(("b",))

        assert model.plain_text().splitlines() == [
            "▼ {",
            '    "a": 1,',
            '  ▶ "b": [...]',
            "  }",
        ]

    def test_plain_text_custom_glyphs(self) -> None:
        model = TreeModel({"a": {}}, ExpansionState())
        text = model.plain_text(4, expanded_glyph="-", collapsed_glyph="+")
        assert text.splitlines() == ["- {", '      "a": {}', "  }"]

    def test_large_numbers_keep_canonical_literals(self) -> None:
        model = TreeModel(to_json_value({"big": 1e300, "f": 1e21, "n": 1e20}))

        assert model.plain_text().splitlines()[1:4] == [
            '    "big": 1e+300,',
            '    "f": 1e+21,',
            '    "n": 100000000000000000000',
        ]


class TestFormatPath:
    """Tests for format_path."""

    def test_root(self) -> None:
        assert format_path(ROOT) == "$"

    def test_mixed_path(self) -> None:
        assert format_path(("items", 0, "display name")) == '$.items[0]["display name"]'
