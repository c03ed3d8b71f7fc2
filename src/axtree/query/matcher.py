"""
Query evaluation against normalized elements.
"""

from typing import List, Optional, Sequence

from ..schemas.element import Element
from .models import Comparison, Query


def _compare(constraint: Optional[Comparison], actual: Optional[float]) -> bool:
    if constraint is None:
        return True
    if actual is None:
        return False
    return constraint.matches(actual)


def _contains_point(frame, point) -> bool:
    ex, ey, ew, eh = frame
    px, py = point
    return ex <= px <= ex + ew and ey <= py <= ey + eh


def _intersects(frame, rect) -> bool:
    ex, ey, ew, eh = frame
    qx, qy, qw, qh = rect
    return not (
        ex >= qx + qw or qx >= ex + ew or ey >= qy + qh or qy >= ey + eh
    )


class QueryMatcher:
    """
    Stateless evaluator for Query trees.

    Precedence on a single node: AND sub-queries short-circuit on the first
    failure, OR sub-queries on the first success, a NOT sub-query inverts its
    result, then every direct leaf constraint must hold as well. Constraints
    on attributes the element lacks fail closed.
    """

    @classmethod
    def matches(
        cls,
        element: Element,
        query: Query,
        all_elements: Optional[Sequence[Element]] = None,
    ) -> bool:
        """
        Evaluate a query against one element.

        Args:
            element: Candidate element
            query: Compiled query
            all_elements: Element set the candidate belongs to

        Returns:
            True if every constraint on the query holds
        """
        if query.all_of and not all(
            cls.matches(element, q, all_elements) for q in query.all_of
        ):
            return False

        if query.any_of and not any(
            cls.matches(element, q, all_elements) for q in query.any_of
        ):
            return False

        if query.inverted is not None and cls.matches(
            element, query.inverted, all_elements
        ):
            return False

        return cls._matches_leaves(element, query, all_elements)

    @classmethod
    def _matches_leaves(
        cls,
        element: Element,
        query: Query,
        all_elements: Optional[Sequence[Element]],
    ) -> bool:
        if query.role is not None and not query.role.matches(element.role):
            return False

        for name in ("description", "identifier", "role_description", "help"):
            condition = getattr(query, name)
            if condition is not None and not condition.matches(getattr(element, name)):
                return False

        if query.selected is not None and element.selected != query.selected:
            return False
        if query.enabled is not None and element.enabled != query.enabled:
            return False
        if query.focused is not None and element.focused != query.focused:
            return False

        position = element.position
        size = element.size
        if not _compare(query.x, position.x if position else None):
            return False
        if not _compare(query.y, position.y if position else None):
            return False
        if not _compare(query.width, size.width if size else None):
            return False
        if not _compare(query.height, size.height if size else None):
            return False

        if query.bounds_contains is not None or query.bounds_intersects is not None:
            frame = element.frame
            if frame is None:
                return False
            if query.bounds_contains is not None and not _contains_point(
                frame, query.bounds_contains
            ):
                return False
            if query.bounds_intersects is not None and not _intersects(
                frame, query.bounds_intersects
            ):
                return False

        children = element.children or []
        if query.has_child is not None and not any(
            cls.matches(child, query.has_child, all_elements) for child in children
        ):
            return False
        if query.child_count is not None and len(children) != query.child_count:
            return False
        if query.min_child_count is not None and len(children) < query.min_child_count:
            return False

        return True

    @classmethod
    def filter(cls, elements: Sequence[Element], query: Query) -> List[Element]:
        """Keep the elements matching the query, in order."""
        return [e for e in elements if cls.matches(e, query, elements)]


def matches(
    element: Element, query: Query, all_elements: Optional[Sequence[Element]] = None
) -> bool:
    return QueryMatcher.matches(element, query, all_elements)
