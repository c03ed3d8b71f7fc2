"""
Parser for indented accessibility text dumps.

A dump is a sequence of "Key: Value" lines. Indentation gives the depth of a
node's properties, and "Child[n]:" or "Element:" lines introduce a child
whose properties start on the next line:

    Role: AXWindow
    Value: Document
    Child[0]:
      Role: AXButton
      Description: Close
      Position: (10, 20)
      Size: (16, 16)
"""

import logging
from typing import Dict, List, Optional, Tuple

from ...errors import DumpParseError, DumpParseErrorKind
from ...schemas.element import Point, Size
from ...schemas.raw import RawElement

logger = logging.getLogger(__name__)

_CHILD_PREFIX = "Child["
_ELEMENT_MARKER = "Element:"
_TRUE_VALUES = ("true", "yes", "1")
_FALSE_VALUES = ("false", "no", "0")


def _depth(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def _is_child_marker(line: str) -> bool:
    text = line.strip()
    return text.startswith(_CHILD_PREFIX) or text == _ELEMENT_MARKER


def _find_key_colon(text: str) -> Optional[int]:
    parens = 0
    brackets = 0
    for i, ch in enumerate(text):
        if ch == "(":
            parens += 1
        elif ch == ")":
            parens -= 1
        elif ch == "[":
            brackets += 1
        elif ch == "]":
            brackets -= 1
        elif ch == ":" and parens == 0 and brackets == 0:
            return i
    return None


def parse_property_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a "Key: Value" line.

    Colons inside parentheses or brackets do not split the key.

    Returns:
        (key, value) or None for markers and malformed lines
    """
    text = line.strip()
    if _is_child_marker(text):
        return None
    index = _find_key_colon(text)
    if index is None:
        return None
    key = text[:index].strip()
    if not key:
        return None
    return key, text[index + 1 :].strip()


def parse_pair(text: Optional[str]) -> Optional[Tuple[float, float]]:
    """Parse "(x, y)" or "x, y" into two floats."""
    if text is None:
        return None
    parts = text.strip("(){}[] ").split(",")
    if len(parts) != 2:
        return None
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError:
        return None


def parse_bool(text: Optional[str]) -> Optional[bool]:
    if text is None:
        return None
    lowered = text.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def _build_raw(properties: Dict[str, str], children: List[RawElement]) -> RawElement:
    position = parse_pair(properties.get("Position"))
    size = parse_pair(properties.get("Size"))
    selected = parse_bool(properties.get("Selected"))
    enabled = parse_bool(properties.get("Enabled"))
    focused = parse_bool(properties.get("Focused"))

    value = properties.get("Value")
    if value is None:
        value = properties.get("Title")
    if value is None:
        value = properties.get("Label")

    return RawElement(
        role=properties.get("Role"),
        description=properties.get("Description"),
        identifier=properties.get("Identifier"),
        role_description=properties.get("RoleDescription"),
        help=properties.get("Help"),
        value=value,
        position=Point(x=position[0], y=position[1]) if position else None,
        size=Size(width=size[0], height=size[1]) if size else None,
        selected=selected if selected is not None else False,
        enabled=enabled if enabled is not None else True,
        focused=focused if focused is not None else False,
        children=children,
    )


class DumpParser:
    """Recursive-descent parser over the non-blank lines of a dump."""

    def __init__(self, text: str):
        self._lines = [line for line in text.splitlines() if line.strip()]
        self._index = 0

    def parse(self) -> RawElement:
        """
        Parse the whole dump into a raw tree.

        Raises:
            DumpParseError: If the dump is empty
        """
        if not self._lines:
            raise DumpParseError(DumpParseErrorKind.EMPTY_INPUT)
        self._index = 0
        return self._parse_node(0)

    def _parse_node(self, depth: int) -> RawElement:
        if self._index >= len(self._lines):
            raise DumpParseError(DumpParseErrorKind.UNEXPECTED_END)

        properties: Dict[str, str] = {}
        children: List[RawElement] = []

        while self._index < len(self._lines):
            line = self._lines[self._index]
            current = _depth(line)

            if current < depth:
                break

            if _is_child_marker(line):
                self._index += 1
                if self._index < len(self._lines):
                    children.append(self._parse_node(_depth(self._lines[self._index])))
                continue

            if current > depth:
                children.append(self._parse_node(current))
                continue

            parsed = parse_property_line(line)
            if parsed is not None:
                key, value = parsed
                properties[key] = value
            self._index += 1

        return _build_raw(properties, children)


def parse_dump(text: str) -> RawElement:
    """Parse an accessibility text dump into a raw tree."""
    root = DumpParser(text).parse()
    logger.debug(f"Parsed dump with root role {root.role}")
    return root
