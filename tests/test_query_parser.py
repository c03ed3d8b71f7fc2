"""
Tests for the query language parser.
"""

import pytest

from axtree.errors import ParseErrorKind, QueryParseError
from axtree.query import (
    Comparison,
    ComparisonOperator,
    Query,
    RoleCondition,
    TextOperator,
    find_operator,
    parse_query,
    parse_query_result,
    split_conditions,
)
from axtree.tools.accessibility.role_normalizer import Role


def _error(text):
    with pytest.raises(QueryParseError) as exc_info:
        parse_query(text)
    return exc_info.value


class TestSplitConditions:
    """Comma splitting with backslash escapes."""

    def test_plain_split(self):
        assert split_conditions("a=1,b=2") == ["a=1", "b=2"]

    def test_escaped_comma_is_literal(self):
        assert split_conditions("description=Hello\\, World") == [
            "description=Hello, World"
        ]

    def test_other_escapes_pass_through(self):
        assert split_conditions("description~=\\d+") == ["description~=\\d+"]

    def test_trailing_backslash_kept(self):
        assert split_conditions("description=a\\") == ["description=a\\"]


class TestSingleConditions:
    """One condition becomes one leaf."""

    def test_role(self):
        assert parse_query("role=Button") == Query(role=RoleCondition(Role.BUTTON))

    def test_role_not_equal(self):
        query = parse_query("role!=Text")
        assert query.role == RoleCondition(Role.TEXT, negate=True)

    def test_role_alias(self):
        assert parse_query("role=btn").role.role == Role.BUTTON
        assert parse_query("role=TextField").role.role == Role.FIELD

    def test_text_equals(self):
        query = parse_query("description=Save")
        assert query.description.operator == TextOperator.EQUALS
        assert query.description.value == "Save"

    def test_escaped_comma_stays_one_condition(self):
        query = parse_query("description=Hello\\, World")
        assert query.all_of == ()
        assert query.description.value == "Hello, World"

    def test_contains(self):
        query = parse_query("identifier*=save")
        assert query.identifier.operator == TextOperator.CONTAINS
        assert query.identifier.value == "save"

    def test_regex_compiled_eagerly(self):
        query = parse_query("description~=^Sa.e$")
        assert query.description.operator == TextOperator.REGEX
        assert query.description.pattern is not None
        assert query.description.pattern.search("Save")

    def test_role_description_and_help(self):
        assert parse_query("roleDescription=close button").role_description.value == (
            "close button"
        )
        assert parse_query("help*=save").help.operator == TextOperator.CONTAINS

    @pytest.mark.parametrize(
        "text,field,operator,value",
        [
            ("x=10", "x", ComparisonOperator.EQUALS, 10.0),
            ("x!=3", "x", ComparisonOperator.NOT_EQUALS, 3.0),
            ("y>5.5", "y", ComparisonOperator.GREATER, 5.5),
            ("width<20", "width", ComparisonOperator.LESS, 20.0),
            ("height>=-1", "height", ComparisonOperator.GREATER_OR_EQUAL, -1.0),
            ("x<=100", "x", ComparisonOperator.LESS_OR_EQUAL, 100.0),
        ],
    )
    def test_numeric(self, text, field, operator, value):
        assert getattr(parse_query(text), field) == Comparison(operator, value)

    @pytest.mark.parametrize(
        "text,field,value",
        [
            ("enabled=false", "enabled", False),
            ("selected=TRUE", "selected", True),
            ("focused!=true", "focused", False),
            ("enabled!=false", "enabled", True),
        ],
    )
    def test_booleans(self, text, field, value):
        assert getattr(parse_query(text), field) is value

    def test_regex_value_may_contain_comparisons(self):
        query = parse_query("description~=a=b>c")
        assert query.description.operator == TextOperator.REGEX
        assert query.description.value == "a=b>c"

    def test_contains_value_may_contain_comparisons(self):
        query = parse_query("identifier*=a=b")
        assert query.identifier.operator == TextOperator.CONTAINS
        assert query.identifier.value == "a=b"

    @pytest.mark.parametrize("text", ["1e3", "-2.5", ".5", "+4"])
    def test_numeric_literals(self, text):
        assert parse_query(f"x={text}").x.value == float(text)


class TestOperatorPriority:
    """Regex, then containment, then comparisons longest first."""

    def test_find_operator_order(self):
        assert find_operator("x>=10") == (1, ">=")
        assert find_operator("description=a~=b") == (13, "~=")
        assert find_operator("identifier=x*=y") == (12, "*=")
        assert find_operator("description=a>b") == (13, ">")
        assert find_operator("description") is None

    @pytest.mark.parametrize(
        "text,key",
        [
            ("description=a~=b", "description=a"),
            ("identifier=x*=y", "identifier=x"),
            ("description=a>b", "description=a"),
        ],
    )
    def test_later_operator_splits_key(self, text, key):
        err = _error(text)
        assert err.kind == ParseErrorKind.UNSUPPORTED_KEY
        assert err.detail == key


class TestMultipleConditions:
    """Two or more conditions combine into an AND."""

    def test_implicit_and(self):
        query = parse_query("role=Button,description=Save")
        assert len(query.all_of) == 2
        assert query.all_of[0].role.role == Role.BUTTON
        assert query.all_of[1].description.value == "Save"

    def test_whitespace_around_conditions(self):
        query = parse_query(" role=Button , x>10 ")
        assert len(query.all_of) == 2
        assert query.all_of[1].x == Comparison(ComparisonOperator.GREATER, 10.0)


class TestParseErrors:
    """Every failure is typed and names the offending condition."""

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_query(self, text):
        assert _error(text).kind == ParseErrorKind.EMPTY_QUERY

    def test_unsupported_key(self):
        err = _error("role=Button,colour=red")
        assert err.kind == ParseErrorKind.UNSUPPORTED_KEY
        assert err.condition == "colour=red"
        assert err.detail == "colour"
        assert "colour=red" in str(err)

    def test_missing_operator(self):
        err = _error("description")
        assert err.kind == ParseErrorKind.INVALID_CONDITION
        assert err.condition == "description"

    def test_missing_key(self):
        assert _error("=Save").kind == ParseErrorKind.INVALID_CONDITION

    def test_empty_segment(self):
        assert _error("role=Button,").kind == ParseErrorKind.INVALID_CONDITION

    def test_invalid_regex(self):
        err = _error("description~=[unclosed")
        assert err.kind == ParseErrorKind.INVALID_REGEX
        assert err.condition == "description~=[unclosed"

    @pytest.mark.parametrize(
        "text",
        [
            "enabled=maybe",
            "selected=1",
            "x=abc",
            "width>=",
            "x=nan",
            "y=inf",
            "width=1_000",
            "height=0x10",
        ],
    )
    def test_invalid_values(self, text):
        err = _error(text)
        assert err.kind == ParseErrorKind.INVALID_VALUE
        assert err.condition == text

    def test_unknown_role_value(self):
        err = _error("role=Spaceship")
        assert err.kind == ParseErrorKind.INVALID_VALUE
        assert err.detail == "Spaceship"

    def test_explicit_unknown_role_allowed(self):
        assert parse_query("role=Unknown").role.role == Role.UNKNOWN

    @pytest.mark.parametrize(
        "text", ["role>Button", "role*=Butt", "x*=1", "enabled~=true", "description>=a"]
    )
    def test_operator_not_supported_for_field(self, text):
        assert _error(text).kind == ParseErrorKind.INVALID_CONDITION


class TestParseQueryResult:
    """Non-raising parse entry point."""

    def test_success(self):
        query, error = parse_query_result("role=Button")
        assert error is None
        assert query.role.role == Role.BUTTON

    def test_failure(self):
        query, error = parse_query_result("nope=1")
        assert query is None
        assert error.kind == ParseErrorKind.UNSUPPORTED_KEY
