"""
Query language: AST, parser and matcher.
"""

from .models import (
    Comparison,
    ComparisonOperator,
    Query,
    RoleCondition,
    TextCondition,
    TextOperator,
)
from .parser import find_operator, parse_query, parse_query_result, split_conditions
from .matcher import QueryMatcher, matches

__all__ = [
    "Comparison",
    "ComparisonOperator",
    "Query",
    "RoleCondition",
    "TextCondition",
    "TextOperator",
    "find_operator",
    "parse_query",
    "parse_query_result",
    "split_conditions",
    "QueryMatcher",
    "matches",
]
