"""
Tests for query evaluation.
"""

import pytest

from axtree.query import Query, QueryMatcher, RoleCondition, TextCondition, matches, parse_query
from axtree.tools.accessibility.role_normalizer import Role, SystemRole


class TestParserMatcherAgreement:
    """Parsed queries select exactly what they describe."""

    def test_role_and_description(self, element):
        query = parse_query("role=Button,description=Save")
        assert matches(element(SystemRole.BUTTON, description="Save"), query)
        assert not matches(element(SystemRole.BUTTON, description="Cancel"), query)
        assert not matches(element(SystemRole.STATIC_TEXT, description="Save"), query)
        assert not matches(element(SystemRole.BUTTON, description="save"), query)

    def test_contains_is_case_insensitive(self, element):
        query = parse_query("description*=av")
        assert matches(element(description="Save"), query)
        assert matches(element(description="average"), query)
        assert matches(element(description="AVATAR"), query)
        assert not matches(element(description="Close"), query)

    def test_regex_searches(self, element):
        query = parse_query("description~=av")
        assert matches(element(description="Save"), query)
        assert not matches(element(description="Close"), query)

    def test_role_matches_generic_role(self, element):
        query = parse_query("role=Check")
        assert matches(element(SystemRole.CHECK_BOX), query)

    def test_role_not_equal(self, element):
        query = parse_query("role!=Button")
        assert matches(element(SystemRole.LINK), query)
        assert not matches(element(SystemRole.BUTTON), query)


class TestMissingFields:
    """Constraints on absent attributes fail closed."""

    def test_width_without_size(self, element):
        assert not matches(element(position=(0, 0)), parse_query("width>0"))

    def test_x_without_position(self, element):
        assert not matches(element(size=(10, 10)), parse_query("x>=0"))

    def test_text_not_equal_without_text(self, element):
        assert not matches(element(), parse_query("description!=Save"))

    def test_contains_without_text(self, element):
        assert not matches(element(), parse_query("identifier*=a"))

    def test_spatial_without_bounds(self, element):
        assert not matches(element(), Query.at_point(0, 0))
        assert not matches(element(), Query.within((0, 0, 100, 100)))


class TestNumericAndState:
    """Numeric comparisons and state flags."""

    def test_numeric_range(self, element):
        query = parse_query("x>=10,x<20,height=30")
        assert matches(element(position=(10, 0), size=(5, 30)), query)
        assert not matches(element(position=(20, 0), size=(5, 30)), query)
        assert not matches(element(position=(15, 0), size=(5, 31)), query)

    def test_numeric_uses_float_geometry(self, element):
        assert matches(element(position=(10.5, 0), size=(1, 1)), parse_query("x>10"))

    def test_default_state_values(self, element):
        plain = element()
        assert matches(plain, parse_query("enabled=true,selected=false,focused=false"))

    def test_non_default_state(self, element):
        disabled = element(enabled=False)
        assert matches(disabled, parse_query("enabled=false"))
        assert not matches(disabled, parse_query("enabled=true"))


class TestSpatial:
    """Point containment and rectangle intersection on float bounds."""

    def test_point_containment_is_inclusive(self, element):
        target = element(position=(10, 20), size=(100, 50))
        assert matches(target, Query.at_point(10, 20))
        assert matches(target, Query.at_point(110, 70))
        assert not matches(target, Query.at_point(110.5, 70))

    def test_point_containment_uses_fractional_origin(self, element):
        target = element(position=(10.5, 0), size=(10, 10))
        assert not matches(target, Query.at_point(10.2, 5))
        assert matches(target, Query.at_point(20.4, 5))

    def test_rectangle_intersection(self, element):
        target = element(position=(0, 0), size=(10, 10))
        assert matches(target, Query.within((9.5, 0, 5, 5)))
        assert not matches(target, Query.within((10, 0, 5, 5)))
        assert not matches(target, Query.within((0, 10, 5, 5)))
        assert matches(target, Query.within((-5, -5, 6, 6)))


class TestCombinators:
    """AND, OR, NOT and mixed nodes."""

    def test_and_or_not(self, element):
        save = element(description="Save")
        open_ = element(description="Open")
        text = element(SystemRole.STATIC_TEXT, description="Save")

        is_save = Query(description=TextCondition.equals("Save"))
        is_open = Query(description=TextCondition.equals("Open"))

        assert matches(save, Query.button().and_(is_save))
        assert not matches(text, Query.button().and_(is_save))
        assert matches(open_, is_save.or_(is_open))
        assert not matches(element(description="Quit"), is_save.or_(is_open))
        assert matches(open_, is_save.negated())
        assert not matches(save, is_save.negated())

    def test_leaves_and_combinators_on_same_node(self, element):
        query = Query(
            role=RoleCondition(Role.BUTTON),
            any_of=(
                Query(description=TextCondition.equals("Save")),
                Query(description=TextCondition.equals("Open")),
            ),
        )
        assert matches(element(description="Save"), query)
        assert not matches(element(SystemRole.STATIC_TEXT, description="Save"), query)
        assert not matches(element(description="Quit"), query)

    def test_builders(self, element):
        assert matches(element(description="OK"), Query.button("OK"))
        assert not matches(element(description="OK"), Query.button("Cancel"))
        assert matches(
            element(SystemRole.TEXT_FIELD, identifier="email"), Query.text_field("email")
        )
        assert matches(element(description="Search box"), Query.containing("search"))

    @pytest.mark.parametrize(
        "system_role,expected",
        [
            (SystemRole.BUTTON, True),
            (SystemRole.TEXT_AREA, True),
            (SystemRole.TAB_GROUP, True),
            (SystemRole.MENU_BAR_ITEM, True),
            (SystemRole.STATIC_TEXT, False),
            (SystemRole.GROUP, False),
        ],
    )
    def test_interactive(self, element, system_role, expected):
        assert matches(element(system_role), Query.interactive()) is expected


class TestHierarchy:
    """Child predicates look at direct children only."""

    def test_with_child(self, element):
        label = element(SystemRole.STATIC_TEXT, description="OK")
        button = element(children=[label])
        query = Query.button().with_child(Query(description=TextCondition.equals("OK")))
        assert matches(button, query)

    def test_grandchildren_are_not_considered(self, element):
        label = element(SystemRole.STATIC_TEXT, description="OK")
        group = element(SystemRole.GROUP, children=[label])
        button = element(children=[group])
        query = Query(has_child=Query(description=TextCondition.equals("OK")))
        assert not matches(button, query)

    def test_child_counts(self, element):
        parent = element(children=[element(), element()])
        assert matches(parent, Query(child_count=2))
        assert not matches(parent, Query(child_count=1))
        assert matches(parent, Query(min_child_count=2))
        assert not matches(parent, Query(min_child_count=3))
        assert matches(element(), Query(child_count=0))


class TestFilter:
    """QueryMatcher.filter keeps order."""

    def test_filter(self, element):
        elements = [
            element(description="Save"),
            element(SystemRole.STATIC_TEXT, description="Title"),
            element(description="Open"),
        ]
        result = QueryMatcher.filter(elements, parse_query("role=Button"))
        assert [e.description for e in result] == ["Save", "Open"]
