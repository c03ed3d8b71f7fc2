"""
axtree: accessibility tree normalization, querying and lightweight encoding.
"""

from .errors import (
    AxTreeError,
    QueryParseError,
    TooManyElementsError,
)
from .query import Query, QueryMatcher, parse_query
from .schemas import Element, RawElement
from .tools.accessibility.role_normalizer import Role, SystemRole

__version__ = "0.1.0"

__all__ = [
    "AxTreeError",
    "QueryParseError",
    "TooManyElementsError",
    "Query",
    "QueryMatcher",
    "parse_query",
    "Element",
    "RawElement",
    "Role",
    "SystemRole",
]
