"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest."""
    # Add src to path
    src_path = Path(__file__).parent.parent / "src"
    sys.path.insert(0, str(src_path))

    config.addinivalue_line("markers", "concurrency: exercises threaded access")


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        if "concurrent" in item.nodeid.lower():
            item.add_marker("concurrency")


@pytest.fixture
def raw():
    """
    Factory for raw accessibility nodes.

    Position and size are given as (x, y) and (width, height) tuples.
    """
    from axtree.schemas import Point, RawElement, Size

    def make(role=None, children=None, position=None, size=None, **attributes):
        return RawElement(
            role=role,
            position=Point(x=position[0], y=position[1]) if position else None,
            size=Size(width=size[0], height=size[1]) if size else None,
            children=children or [],
            **attributes,
        )

    return make


@pytest.fixture
def element():
    """Factory for normalized elements with optional geometry tuples."""
    from axtree.schemas import Element, Point, Size
    from axtree.tools.accessibility.role_normalizer import SystemRole

    def make(system_role=SystemRole.BUTTON, position=None, size=None, **attributes):
        return Element.create(
            system_role,
            position=Point(x=position[0], y=position[1]) if position else None,
            size=Size(width=size[0], height=size[1]) if size else None,
            **attributes,
        )

    return make


SAMPLE_DUMP = """\
Role: AXWindow
Value: Document
Position: (0, 0)
Size: (800, 600)
Child[0]:
  Role: AXButton
  Description: Close
  Identifier: close-button
  Position: (10, 20)
  Size: (16, 16)
  Enabled: no
Child[1]:
  Role: AXGroup
  Child[0]:
    Role: AXStaticText
    Title: Hello: World
    RoleDescription: text
    Position: (40, 60)
    Size: (120, 18)
"""


@pytest.fixture
def sample_dump():
    """Small window dump with a button and a grouped text."""
    return SAMPLE_DUMP
