"""
Services module.

Submodules:
- converter: Text dump to lightweight JSON in one call
- dumper: Flat and hierarchical dumps through an element source and cache
- snapshot: Addressable snapshots with resolve and inspect
"""

from .converter import convert_dump
from .dumper import AccessibilityDumper
from .snapshot import build_snapshot, capture, export_snapshot, inspect, resolve

__all__ = [
    "AccessibilityDumper",
    "convert_dump",
    "build_snapshot",
    "capture",
    "export_snapshot",
    "inspect",
    "resolve",
]
