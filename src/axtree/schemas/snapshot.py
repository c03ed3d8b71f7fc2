"""
Snapshot schemas: an addressable, pre-order capture of an element list.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..tools.accessibility.role_normalizer import Role


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Rect(_CamelModel):
    x: int
    y: int
    width: int
    height: int


class NodeState(_CamelModel):
    selected: bool = False
    enabled: bool = True
    focused: bool = False


class NodeTraits(_CamelModel):
    """Derived capabilities of a snapshot node."""

    is_visible: bool = Field(description="Bounds present with positive width and height")
    is_hittable: bool = Field(description="Visible and enabled")
    is_interactive: bool = Field(description="Role is an interactive control")
    supports_press: bool
    supports_set_value: bool
    supports_increment: bool
    supports_decrement: bool


class SnapshotNode(_CamelModel):
    node_id: str = Field(description="Stable element id")
    legacy_id: str = Field(description="Id used by older clients")
    path: List[int] = Field(description="Index path from the top-level list")
    parent_node_id: Optional[str] = Field(default=None)
    role: Role
    system_role: Optional[str] = None
    label: Optional[str] = Field(default=None, description="Element description")
    identifier: Optional[str] = None
    role_description: Optional[str] = None
    help: Optional[str] = None
    value: Optional[str] = None
    bounds: Optional[Rect] = None
    state: NodeState
    traits: NodeTraits


class SnapshotIndex(_CamelModel):
    by_node_id: Dict[str, int] = Field(default_factory=dict)
    by_legacy_id: Dict[str, List[int]] = Field(default_factory=dict)


class Snapshot(_CamelModel):
    snapshot_id: str
    captured_at: datetime
    app_identifier: str
    window_index: Optional[int] = None
    nodes: List[SnapshotNode]
    index: SnapshotIndex


class ResolutionKind(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    NOT_FOUND = "notFound"


class ResolutionResult(_CamelModel):
    kind: ResolutionKind
    node: Optional[SnapshotNode] = None
    matched_by: Optional[str] = Field(
        default=None, description="nodeID, legacyID or nodeID-prefix"
    )


class NodeAction(str, Enum):
    PRESS = "press"
    SET_VALUE = "setValue"
    INCREMENT = "increment"
    DECREMENT = "decrement"


class CenterPoint(_CamelModel):
    x: float
    y: float


class NodeInspection(_CamelModel):
    node_id: str
    legacy_id: str
    bounds: Optional[Rect] = None
    center_point: Optional[CenterPoint] = None
    hit_point: Optional[CenterPoint] = None
    actions: List[NodeAction] = Field(default_factory=list)
    traits: NodeTraits
