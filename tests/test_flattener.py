"""
Tests for tree flattening.
"""

import pytest

from axtree.errors import TooManyElementsError
from axtree.query import parse_query
from axtree.tools.accessibility.flattener import (
    build_element_tree,
    flatten,
    structural_children,
)
from axtree.tools.accessibility.role_normalizer import Role, SystemRole


class TestFlattenBasics:
    """Node selection rules."""

    def test_groups_are_transparent(self, raw):
        tree = raw(
            "AXWindow",
            children=[
                raw("AXGroup", children=[raw("AXButton", description="OK")]),
            ],
        )
        roles = [e.role for e in flatten(tree)]
        assert roles == [Role.WINDOW, Role.BUTTON]

    def test_pre_order(self, raw):
        tree = raw(
            "AXWindow",
            description="root",
            children=[
                raw("AXToolbar", description="a", children=[raw("AXStaticText", description="a1")]),
                raw("AXStaticText", description="b"),
            ],
        )
        assert [e.description for e in flatten(tree)] == ["root", "a", "a1", "b"]

    def test_zero_size_skipped_by_default(self, raw):
        tree = raw(
            "AXWindow",
            children=[raw("AXButton", description="hidden", position=(0, 0), size=(0, 0))],
        )
        assert [e.description for e in flatten(tree)] == [None]

    def test_zero_size_included_on_request(self, raw):
        tree = raw(
            "AXWindow",
            children=[raw("AXButton", description="hidden", position=(0, 0), size=(0, 0))],
        )
        result = flatten(tree, include_zero_size=True)
        assert [e.description for e in result] == [None, "hidden"]

    def test_single_zero_dimension_is_kept(self, raw):
        tree = raw(
            "AXWindow",
            children=[raw("AXSplitter", description="divider", position=(0, 0), size=(0, 400))],
        )
        assert "divider" in [e.description for e in flatten(tree)]

    def test_zero_size_subtree_still_traversed(self, raw):
        tree = raw(
            "AXWindow",
            children=[
                raw(
                    "AXToolbar",
                    size=(0, 0),
                    children=[raw("AXButton", description="Inner")],
                )
            ],
        )
        descriptions = [e.description for e in flatten(tree)]
        assert "Inner" in descriptions

    def test_contentless_node_children_are_visited(self, raw):
        tree = raw(children=[raw("AXStaticText", description="Visible")])
        result = flatten(tree)
        assert [e.description for e in result] == ["Visible"]

    def test_empty_group_yields_nothing(self, raw):
        assert flatten(raw("AXGroup")) == []

    def test_unknown_role_participates(self, raw):
        result = flatten(raw("AXWeirdWidget", description="odd"))
        assert len(result) == 1
        assert result[0].system_role == SystemRole.UNKNOWN
        assert result[0].role == Role.UNKNOWN


class TestStructuralChildren:
    """Interactive elements carry shallow structural children."""

    def test_button_children(self, raw):
        button = raw(
            "AXButton",
            description="Save",
            children=[
                raw("AXGroup", children=[raw("AXStaticText", description="Save")]),
                raw("AXImage", description="icon"),
                raw(),
            ],
        )
        tree = raw("AXWindow", children=[button])
        result = flatten(tree)

        assert [e.role for e in result] == [Role.WINDOW, Role.BUTTON, Role.TEXT, Role.IMAGE]
        emitted_button = result[1]
        assert [c.role for c in emitted_button.children] == [Role.TEXT, Role.IMAGE]
        assert all(c.children is None for c in emitted_button.children)

    def test_non_interactive_elements_have_no_children(self, raw):
        tree = raw("AXWindow", children=[raw("AXStaticText", description="a")])
        window = flatten(tree)[0]
        assert window.children is None

    def test_nested_groups_are_expanded(self, raw):
        children = [
            raw("AXGroup", children=[raw("AXGroup", children=[raw("AXImage")])]),
        ]
        result = structural_children(children)
        assert [c.system_role for c in result] == [SystemRole.IMAGE]


class TestFlattenQuery:
    """Filtering during flattening."""

    def test_query_does_not_prune(self, raw):
        tree = raw(
            "AXWindow",
            children=[
                raw("AXToolbar", children=[raw("AXButton", description="Deep")]),
            ],
        )
        result = flatten(tree, query=parse_query("role=Button"))
        assert [e.description for e in result] == ["Deep"]

    def test_limit_counts_matching_elements_only(self, raw):
        texts = [raw("AXStaticText", description=f"t{i}") for i in range(10)]
        tree = raw("AXWindow", children=texts + [raw("AXButton", description="OK")])
        result = flatten(tree, max_elements=1, query=parse_query("role=Button"))
        assert len(result) == 1


class TestElementLimit:
    """Ceiling enforcement."""

    def test_limit_exceeded(self, raw):
        tree = raw(
            "AXGroup",
            children=[raw("AXButton", description=f"b{i}") for i in range(5001)],
        )
        with pytest.raises(TooManyElementsError) as exc_info:
            flatten(tree, max_elements=5000)
        assert exc_info.value.found == 5001
        assert exc_info.value.limit == 5000

    def test_exact_limit_passes(self, raw):
        tree = raw(
            "AXGroup",
            children=[raw("AXButton", description=f"b{i}") for i in range(5)],
        )
        assert len(flatten(tree, max_elements=5)) == 5


class TestBuildElementTree:
    """Hierarchical conversion keeps every node."""

    def test_groups_kept(self, raw):
        tree = raw(
            "AXWindow",
            children=[raw("AXGroup", children=[raw("AXButton", description="OK")])],
        )
        root = build_element_tree(tree)
        group = root.children[0]
        assert group.role == Role.GROUP
        assert group.children[0].description == "OK"

    def test_leaf_children_absent(self, raw):
        assert build_element_tree(raw("AXButton")).children is None
