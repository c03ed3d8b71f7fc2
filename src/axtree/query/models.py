"""
Query AST for selecting elements.

A Query node may carry direct leaf constraints and combinators at the same
time; every constraint present on a node must hold. Sub-queries are owned
by their parent, so a Query is always a finite tree.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Pattern, Tuple

from ..tools.accessibility.role_normalizer import Role


class TextOperator(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "!="
    CONTAINS = "*="
    REGEX = "~="


class ComparisonOperator(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER = ">"
    LESS = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="


@dataclass(frozen=True)
class RoleCondition:
    """Generic role equality (or inequality when negate is set)."""

    role: Role
    negate: bool = False

    def matches(self, role: Role) -> bool:
        return (role == self.role) != self.negate


@dataclass(frozen=True)
class TextCondition:
    """
    Constraint on an optional text attribute.

    Equality is exact, containment is case-insensitive, and regex
    conditions search anywhere in the text with a pattern compiled when
    the condition is built.
    """

    operator: TextOperator
    value: str
    pattern: Optional[Pattern] = field(default=None, compare=False, repr=False)

    @classmethod
    def equals(cls, value: str) -> "TextCondition":
        return cls(TextOperator.EQUALS, value)

    @classmethod
    def contains(cls, value: str) -> "TextCondition":
        return cls(TextOperator.CONTAINS, value)

    @classmethod
    def regex(cls, value: str) -> "TextCondition":
        """Raises re.error for an invalid pattern."""
        return cls(TextOperator.REGEX, value, re.compile(value))

    def matches(self, text: Optional[str]) -> bool:
        if text is None:
            return False
        if self.operator == TextOperator.EQUALS:
            return text == self.value
        if self.operator == TextOperator.NOT_EQUALS:
            return text != self.value
        if self.operator == TextOperator.CONTAINS:
            return self.value.lower() in text.lower()
        pattern = self.pattern or re.compile(self.value)
        return pattern.search(text) is not None


@dataclass(frozen=True)
class Comparison:
    """Numeric comparison against a floating-point attribute."""

    operator: ComparisonOperator
    value: float

    def matches(self, actual: float) -> bool:
        op = self.operator
        if op == ComparisonOperator.EQUALS:
            return actual == self.value
        if op == ComparisonOperator.NOT_EQUALS:
            return actual != self.value
        if op == ComparisonOperator.GREATER:
            return actual > self.value
        if op == ComparisonOperator.LESS:
            return actual < self.value
        if op == ComparisonOperator.GREATER_OR_EQUAL:
            return actual >= self.value
        return actual <= self.value


@dataclass(frozen=True)
class Query:
    """Predicate over a single element."""

    role: Optional[RoleCondition] = None
    description: Optional[TextCondition] = None
    identifier: Optional[TextCondition] = None
    role_description: Optional[TextCondition] = None
    help: Optional[TextCondition] = None

    selected: Optional[bool] = None
    enabled: Optional[bool] = None
    focused: Optional[bool] = None

    x: Optional[Comparison] = None
    y: Optional[Comparison] = None
    width: Optional[Comparison] = None
    height: Optional[Comparison] = None

    # (x, y) point the element must contain
    bounds_contains: Optional[Tuple[float, float]] = None
    # (x, y, width, height) rectangle the element must intersect
    bounds_intersects: Optional[Tuple[float, float, float, float]] = None

    has_child: Optional["Query"] = None
    child_count: Optional[int] = None
    min_child_count: Optional[int] = None

    all_of: Tuple["Query", ...] = ()
    any_of: Tuple["Query", ...] = ()
    inverted: Optional["Query"] = None

    @classmethod
    def button(cls, description: Optional[str] = None) -> "Query":
        return cls(
            role=RoleCondition(Role.BUTTON),
            description=TextCondition.equals(description) if description is not None else None,
        )

    @classmethod
    def text_field(cls, identifier: Optional[str] = None) -> "Query":
        return cls(
            role=RoleCondition(Role.FIELD),
            identifier=TextCondition.equals(identifier) if identifier is not None else None,
        )

    @classmethod
    def interactive(cls) -> "Query":
        """Any commonly actionable control."""
        roles = (
            Role.BUTTON,
            Role.FIELD,
            Role.CHECK,
            Role.RADIO,
            Role.SLIDER,
            Role.POP_UP,
            Role.TAB_GROUP,
            Role.MENU_ITEM,
            Role.LINK,
        )
        return cls(any_of=tuple(cls(role=RoleCondition(r)) for r in roles))

    @classmethod
    def within(cls, rect: Tuple[float, float, float, float]) -> "Query":
        """Elements intersecting the (x, y, width, height) rectangle."""
        x, y, w, h = rect
        return cls(bounds_intersects=(float(x), float(y), float(w), float(h)))

    @classmethod
    def containing(cls, text: str) -> "Query":
        return cls(description=TextCondition.contains(text))

    @classmethod
    def at_point(cls, x: float, y: float) -> "Query":
        return cls(bounds_contains=(float(x), float(y)))

    def and_(self, other: "Query") -> "Query":
        return Query(all_of=(self, other))

    def or_(self, other: "Query") -> "Query":
        return Query(any_of=(self, other))

    def negated(self) -> "Query":
        return Query(inverted=self)

    def with_child(self, child_query: "Query") -> "Query":
        return replace(self, has_child=child_query)
