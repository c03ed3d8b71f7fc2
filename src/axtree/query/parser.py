"""
Parser for the textual query language.

Grammar:
    query     := condition ("," condition)*
    condition := field op value
    op        := "~=" | "*=" | ">=" | "<=" | "!=" | ">" | "<" | "="

A backslash before a comma makes it a literal comma inside a value. Any
other backslash sequence is kept as written, so regex escapes survive.

Every failure is reported as a QueryParseError naming the offending
condition. Unknown keys, malformed booleans and numbers, and invalid regex
patterns are rejected here rather than at match time.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..errors import ParseErrorKind, QueryParseError
from ..tools.accessibility.role_normalizer import Role
from .models import (
    Comparison,
    ComparisonOperator,
    Query,
    RoleCondition,
    TextCondition,
    TextOperator,
)

logger = logging.getLogger(__name__)

# Searched in this order; the first operator present anywhere in a condition wins.
_OPERATORS = ("~=", "*=", ">=", "<=", "!=", ">", "<", "=")

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_TEXT_FIELDS = {
    "description": "description",
    "identifier": "identifier",
    "roleDescription": "role_description",
    "help": "help",
}
_BOOL_FIELDS = ("selected", "enabled", "focused")
_NUMERIC_FIELDS = ("x", "y", "width", "height")

SUPPORTED_KEYS = ("role",) + tuple(_TEXT_FIELDS) + _BOOL_FIELDS + _NUMERIC_FIELDS


def split_conditions(text: str) -> List[str]:
    """
    Split a query on unescaped commas.

    Args:
        text: Raw query string

    Returns:
        Condition strings with escaped commas resolved
    """
    conditions: List[str] = []
    current: List[str] = []
    escaped = False

    for ch in text:
        if escaped:
            if ch == ",":
                current.append(",")
            else:
                current.append("\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ",":
            conditions.append("".join(current))
            current = []
        else:
            current.append(ch)

    if escaped:
        current.append("\\")
    conditions.append("".join(current))
    return conditions


def find_operator(condition: str) -> Optional[Tuple[int, str]]:
    """
    Locate the operator of a condition.

    Regex and containment operators take priority over comparisons, and
    comparisons are tried longest first. The condition is split at the
    first occurrence of the winning operator.

    Returns:
        (index, operator) or None when the condition has no operator
    """
    for op in _OPERATORS:
        index = condition.find(op)
        if index >= 0:
            return index, op
    return None


def _parse_role(condition: str, op: str, value: str) -> Query:
    if op not in ("=", "!="):
        raise QueryParseError(
            ParseErrorKind.INVALID_CONDITION,
            condition,
            f"operator '{op}' is not supported for role",
        )
    name = value.strip()
    role = Role.parse(name)
    if role == Role.UNKNOWN and name.lower() != "unknown":
        raise QueryParseError(ParseErrorKind.INVALID_VALUE, condition, name)
    return Query(role=RoleCondition(role, negate=op == "!="))


def _parse_text(condition: str, key: str, op: str, value: str) -> Query:
    if op == "~=":
        try:
            text_condition = TextCondition.regex(value)
        except re.error as e:
            raise QueryParseError(ParseErrorKind.INVALID_REGEX, condition, str(e)) from e
    elif op in ("=", "!=", "*="):
        text_condition = TextCondition(TextOperator(op), value)
    else:
        raise QueryParseError(
            ParseErrorKind.INVALID_CONDITION,
            condition,
            f"operator '{op}' is not supported for {key}",
        )
    return Query(**{_TEXT_FIELDS[key]: text_condition})


def _parse_bool(condition: str, key: str, op: str, value: str) -> Query:
    if op not in ("=", "!="):
        raise QueryParseError(
            ParseErrorKind.INVALID_CONDITION,
            condition,
            f"operator '{op}' is not supported for {key}",
        )
    literal = value.strip().lower()
    if literal not in ("true", "false"):
        raise QueryParseError(ParseErrorKind.INVALID_VALUE, condition, value.strip())
    flag = literal == "true"
    if op == "!=":
        flag = not flag
    return Query(**{key: flag})


def _parse_numeric(condition: str, key: str, op: str, value: str) -> Query:
    if op in ("~=", "*="):
        raise QueryParseError(
            ParseErrorKind.INVALID_CONDITION,
            condition,
            f"operator '{op}' is not supported for {key}",
        )
    literal = value.strip()
    if not _NUMBER.fullmatch(literal):
        raise QueryParseError(ParseErrorKind.INVALID_VALUE, condition, literal)
    number = float(literal)
    return Query(**{key: Comparison(ComparisonOperator(op), number)})


def parse_condition(condition: str) -> Query:
    """
    Parse a single condition into a single-leaf query.

    Raises:
        QueryParseError: On any malformed condition
    """
    found = find_operator(condition)
    if found is None:
        raise QueryParseError(ParseErrorKind.INVALID_CONDITION, condition, "missing operator")

    index, op = found
    key = condition[:index].strip()
    value = condition[index + len(op) :]

    if not key:
        raise QueryParseError(ParseErrorKind.INVALID_CONDITION, condition, "missing key")

    if key == "role":
        return _parse_role(condition, op, value)
    if key in _TEXT_FIELDS:
        return _parse_text(condition, key, op, value)
    if key in _BOOL_FIELDS:
        return _parse_bool(condition, key, op, value)
    if key in _NUMERIC_FIELDS:
        return _parse_numeric(condition, key, op, value)

    raise QueryParseError(ParseErrorKind.UNSUPPORTED_KEY, condition, key)


def parse_query(text: str) -> Query:
    """
    Compile a query string.

    Args:
        text: Query such as "role=Button,description*=save"

    Returns:
        A single-leaf Query, or an AND over all leaves for two or more
        conditions

    Raises:
        QueryParseError: If the query is empty or any condition is invalid
    """
    if text is None or not text.strip():
        raise QueryParseError(ParseErrorKind.EMPTY_QUERY)

    leaves = []
    for raw in split_conditions(text):
        condition = raw.strip()
        if not condition:
            raise QueryParseError(
                ParseErrorKind.INVALID_CONDITION, raw, "empty condition"
            )
        leaves.append(parse_condition(condition))

    if len(leaves) == 1:
        return leaves[0]
    return Query(all_of=tuple(leaves))


def parse_query_result(
    text: str,
) -> Tuple[Optional[Query], Optional[QueryParseError]]:
    """
    Compile a query string without raising.

    Returns:
        (query, None) on success, (None, error) on failure
    """
    try:
        return parse_query(text), None
    except QueryParseError as e:
        logger.debug(f"Query parse failed: {e}")
        return None, e
