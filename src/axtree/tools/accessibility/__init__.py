"""
Platform-agnostic accessibility tree tools.

- role_normalizer: platform roles to SystemRole to generic Role
- element_id: stable 12-character element ids
- flattener: flat and hierarchical element building from raw trees
- dump_parser: indented text dump to raw tree
- protocol: element source contract and a static source
- cache_manager: reader/writer guarded raw-tree cache

Only the leaf modules are re-exported here; the others depend on the
schemas package, which itself depends on these leaves.
"""

from .element_id import compute_element_id, is_current_id
from .role_normalizer import (
    Role,
    SystemRole,
    generic_role,
    normalize_role,
    normalize_system_role,
)

__all__ = [
    "compute_element_id",
    "is_current_id",
    "Role",
    "SystemRole",
    "generic_role",
    "normalize_role",
    "normalize_system_role",
]
