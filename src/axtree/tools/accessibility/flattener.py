"""
Tree flattening and hierarchical element building.

Flattening walks a raw tree depth-first in pre-order and emits one Element
per meaningful node:
- zero-size nodes (both dimensions zero) are skipped unless requested
- nodes with no role, description, identifier or role description are skipped
- Group nodes are transparent
- interactive elements carry a shallow list of their structural children,
  with nested Groups flattened into that list

Skipped and filtered nodes never prune their subtrees. The element ceiling is
enforced on emitted elements and fails fast instead of truncating.
"""

import logging
from typing import List, Optional

from ...errors import TooManyElementsError
from ...query.matcher import QueryMatcher
from ...query.models import Query
from ...schemas.element import Element
from ...schemas.raw import RawElement
from .role_normalizer import Role, normalize_system_role

logger = logging.getLogger(__name__)

DEFAULT_MAX_ELEMENTS = 300


def is_group(raw: RawElement) -> bool:
    return normalize_system_role(raw.role).generic == Role.GROUP


def build_element(
    raw: RawElement, children: Optional[List[Element]] = None
) -> Element:
    """
    Normalize a single raw node.

    Args:
        raw: Raw node from an element source
        children: Children to attach, or None for a leaf

    Returns:
        Element with normalized role, stable id and non-default state
    """
    return Element.create(
        system_role=normalize_system_role(raw.role),
        description=raw.description,
        identifier=raw.identifier,
        role_description=raw.role_description,
        help=raw.help,
        value=raw.value,
        position=raw.position,
        size=raw.size,
        selected=raw.selected,
        enabled=raw.enabled,
        focused=raw.focused,
        children=children or None,
    )


def structural_children(raw_children: List[RawElement]) -> List[Element]:
    """
    Shallow children of an interactive element.

    Groups are replaced by their own structural children; content-less
    nodes are dropped. Returned elements carry no children.
    """
    result: List[Element] = []
    for child in raw_children:
        if is_group(child):
            result.extend(structural_children(child.children))
        elif child.has_content:
            result.append(build_element(child))
    return result


def flatten(
    root: RawElement,
    max_elements: int = DEFAULT_MAX_ELEMENTS,
    include_zero_size: bool = False,
    query: Optional[Query] = None,
) -> List[Element]:
    """
    Flatten a raw tree into a list of elements.

    Args:
        root: Root of the raw tree
        max_elements: Ceiling on emitted elements
        include_zero_size: Emit nodes whose width and height are both zero
        query: Optional filter applied before each element is emitted

    Returns:
        Emitted elements in pre-order

    Raises:
        TooManyElementsError: As soon as the ceiling would be exceeded
    """
    elements: List[Element] = []
    stack = [root]

    while stack:
        raw = stack.pop()
        stack.extend(reversed(raw.children))

        if raw.is_zero_size and not include_zero_size:
            continue
        if not raw.has_content:
            continue
        if is_group(raw):
            continue

        children = None
        if normalize_system_role(raw.role).is_interactive:
            children = structural_children(raw.children)
        element = build_element(raw, children)

        if query is not None and not QueryMatcher.matches(element, query, elements):
            continue

        if len(elements) + 1 > max_elements:
            raise TooManyElementsError(len(elements) + 1, max_elements)
        elements.append(element)

    logger.debug(f"Flattened tree into {len(elements)} elements")
    return elements


def build_element_tree(raw: RawElement) -> Element:
    """
    Convert a raw tree into an Element tree without flattening.

    Every node is kept, Groups included, so the hierarchical encoder can make
    its own structural decisions.
    """
    children = [build_element_tree(child) for child in raw.children]
    return build_element(raw, children)
