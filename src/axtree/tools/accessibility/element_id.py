"""
Stable element identifiers.

Ids are derived from an element's semantic identity (system role, text
attributes, geometry), never from traversal order or platform handles, so
the same element gets the same id across dumps.

Each present field is tagged and terminated with "|", which keeps an absent
field distinguishable from an empty one. The SHA-256 digest is folded onto a
62-character alphabet to give a 12-character id.
"""

import hashlib
from typing import Optional, Tuple

ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 12


def _format_number(value: float) -> str:
    return repr(float(value))


def build_identity_string(
    role: Optional[str],
    identifier: Optional[str] = None,
    description: Optional[str] = None,
    role_description: Optional[str] = None,
    help_text: Optional[str] = None,
    position: Optional[Tuple[float, float]] = None,
    size: Optional[Tuple[float, float]] = None,
) -> str:
    """
    Build the tagged identity string that feeds the hash.

    Args:
        role: System role name (e.g., "Button", "StaticText")
        identifier: Developer-assigned identifier
        description: Accessibility description
        role_description: Localized role description
        help_text: Help/tooltip text
        position: (x, y) in screen coordinates
        size: (width, height)

    Returns:
        Identity string such as "r:Button|d:Save|p:10.0,20.0|"
    """
    parts = []
    if role is not None:
        parts.append(f"r:{role}|")
    if identifier is not None:
        parts.append(f"i:{identifier}|")
    if description is not None:
        parts.append(f"d:{description}|")
    if role_description is not None:
        parts.append(f"rd:{role_description}|")
    if help_text is not None:
        parts.append(f"h:{help_text}|")
    if position is not None:
        parts.append(f"p:{_format_number(position[0])},{_format_number(position[1])}|")
    if size is not None:
        parts.append(f"s:{_format_number(size[0])},{_format_number(size[1])}|")
    return "".join(parts)


def compute_element_id(
    role: Optional[str],
    identifier: Optional[str] = None,
    description: Optional[str] = None,
    role_description: Optional[str] = None,
    help_text: Optional[str] = None,
    position: Optional[Tuple[float, float]] = None,
    size: Optional[Tuple[float, float]] = None,
) -> str:
    """
    Compute the stable 12-character id for an element.

    Identical inputs always give identical ids; changing any single field
    changes the id.

    Returns:
        12-character alphanumeric id
    """
    identity = build_identity_string(
        role, identifier, description, role_description, help_text, position, size
    )
    digest = hashlib.sha256(identity.encode("utf-8")).digest()
    return "".join(ID_ALPHABET[b % len(ID_ALPHABET)] for b in digest[:ID_LENGTH])


def is_current_id(element_id: Optional[str]) -> bool:
    """True for ids produced by the current scheme; shorter ids are legacy."""
    return element_id is not None and len(element_id) == ID_LENGTH
