"""
Pydantic schemas for elements, raw nodes, lightweight nodes and snapshots.
"""

from .element import Element, ElementState, Point, Size
from .raw import RawElement
from .lightweight import LightweightNode, NodeGroup, NodeObject

__all__ = [
    "Element",
    "ElementState",
    "Point",
    "Size",
    "RawElement",
    "LightweightNode",
    "NodeGroup",
    "NodeObject",
]
