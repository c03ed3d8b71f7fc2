"""
Snapshot service.

A snapshot turns a flat element list into addressable nodes: each element
and its shallow children become one node in pre-order, with an index path,
the parent's id and derived traits. Nodes are resolved by exact id, then by
a unique legacy id, then by a 6-character id prefix.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Union

from ..encoding.encoder import filter_redundant_description
from ..query.models import Query
from ..schemas.element import Element
from ..schemas.snapshot import (
    CenterPoint,
    NodeAction,
    NodeInspection,
    NodeState,
    NodeTraits,
    Rect,
    ResolutionKind,
    ResolutionResult,
    Snapshot,
    SnapshotIndex,
    SnapshotNode,
)
from ..tools.accessibility.role_normalizer import Role
from .dumper import AccessibilityDumper

logger = logging.getLogger(__name__)

FUZZY_PREFIX_LENGTH = 6


def _traits(element: Element, bounds: Optional[Rect]) -> NodeTraits:
    is_visible = bounds is not None and bounds.width > 0 and bounds.height > 0
    is_interactive = element.role.is_interactive
    return NodeTraits(
        is_visible=is_visible,
        is_hittable=is_visible and element.enabled,
        is_interactive=is_interactive,
        supports_press=is_interactive,
        supports_set_value=element.role in (Role.FIELD, Role.CHECK, Role.SLIDER),
        supports_increment=element.role == Role.SLIDER,
        supports_decrement=element.role == Role.SLIDER,
    )


def _make_node(
    element: Element, path: List[int], parent_node_id: Optional[str]
) -> SnapshotNode:
    bounds = None
    if element.bounds is not None:
        x, y, w, h = element.bounds
        bounds = Rect(x=x, y=y, width=w, height=h)

    return SnapshotNode(
        node_id=element.id,
        legacy_id=element.id,
        path=path,
        parent_node_id=parent_node_id,
        role=element.role,
        system_role=element.system_role.value,
        label=element.description,
        identifier=element.identifier,
        role_description=element.role_description,
        help=element.help,
        value=element.value,
        bounds=bounds,
        state=NodeState(
            selected=element.selected, enabled=element.enabled, focused=element.focused
        ),
        traits=_traits(element, bounds),
    )


def _collect(
    element: Element,
    path: List[int],
    parent_node_id: Optional[str],
    nodes: List[SnapshotNode],
) -> None:
    node = _make_node(element, path, parent_node_id)
    nodes.append(node)
    for i, child in enumerate(element.children or []):
        _collect(child, path + [i], node.node_id, nodes)


def build_snapshot(
    elements: Sequence[Element],
    app_identifier: str,
    window_index: Optional[int] = None,
    captured_at: Optional[datetime] = None,
) -> Snapshot:
    """
    Build a snapshot from flattened elements.

    Args:
        elements: Top-level elements (children are included as nodes)
        app_identifier: Application the elements came from
        window_index: Window the elements came from, if any
        captured_at: Capture time (defaults to now, UTC)

    Returns:
        Snapshot with nodes in pre-order and an id index
    """
    nodes: List[SnapshotNode] = []
    for i, element in enumerate(elements):
        _collect(element, [i], None, nodes)

    by_node_id: Dict[str, int] = {}
    by_legacy_id: Dict[str, List[int]] = {}
    for i, node in enumerate(nodes):
        by_node_id[node.node_id] = i
        by_legacy_id.setdefault(node.legacy_id, []).append(i)

    return Snapshot(
        snapshot_id=str(uuid.uuid4()),
        captured_at=captured_at or datetime.now(timezone.utc),
        app_identifier=app_identifier,
        window_index=window_index,
        nodes=nodes,
        index=SnapshotIndex(by_node_id=by_node_id, by_legacy_id=by_legacy_id),
    )


def capture(
    dumper: AccessibilityDumper,
    app_identifier: str,
    window_index: Optional[int] = None,
    query: Optional[Union[str, Query]] = None,
    max_elements: Optional[int] = None,
) -> Snapshot:
    """Dump an application through the dumper and snapshot the result."""
    elements = dumper.dump(
        app_identifier,
        query=query,
        window_index=window_index,
        max_elements=max_elements,
    )
    snapshot = build_snapshot(elements, app_identifier, window_index)
    logger.debug(f"Captured snapshot {snapshot.snapshot_id} with {len(snapshot.nodes)} nodes")
    return snapshot


def resolve(node_id: str, snapshot: Snapshot) -> ResolutionResult:
    """
    Find a node by id.

    Returns:
        EXACT for an id match, FUZZY for a unique legacy match or a
        6-character prefix match, NOT_FOUND otherwise
    """
    index = snapshot.index.by_node_id.get(node_id)
    if index is not None:
        return ResolutionResult(
            kind=ResolutionKind.EXACT, node=snapshot.nodes[index], matched_by="nodeID"
        )

    legacy = snapshot.index.by_legacy_id.get(node_id, [])
    if len(legacy) == 1:
        return ResolutionResult(
            kind=ResolutionKind.FUZZY, node=snapshot.nodes[legacy[0]], matched_by="legacyID"
        )

    if len(node_id) >= FUZZY_PREFIX_LENGTH:
        prefix = node_id[:FUZZY_PREFIX_LENGTH]
        for node in snapshot.nodes:
            if node.node_id.startswith(prefix):
                return ResolutionResult(
                    kind=ResolutionKind.FUZZY, node=node, matched_by="nodeID-prefix"
                )

    return ResolutionResult(kind=ResolutionKind.NOT_FOUND)


def inspect(node_id: str, snapshot: Snapshot) -> Optional[NodeInspection]:
    """
    Describe how a node can be acted on.

    Returns:
        Bounds, center point and available actions, or None if unresolved
    """
    node = resolve(node_id, snapshot).node
    if node is None:
        return None

    center = None
    if node.bounds is not None:
        center = CenterPoint(
            x=node.bounds.x + node.bounds.width / 2.0,
            y=node.bounds.y + node.bounds.height / 2.0,
        )

    actions = []
    if node.traits.supports_press:
        actions.append(NodeAction.PRESS)
    if node.traits.supports_set_value:
        actions.append(NodeAction.SET_VALUE)
    if node.traits.supports_increment:
        actions.append(NodeAction.INCREMENT)
    if node.traits.supports_decrement:
        actions.append(NodeAction.DECREMENT)

    return NodeInspection(
        node_id=node.node_id,
        legacy_id=node.legacy_id,
        bounds=node.bounds,
        center_point=center,
        hit_point=center,
        actions=actions,
        traits=node.traits,
    )


def export_snapshot(snapshot: Snapshot, pretty: bool = False) -> str:
    """
    Lightweight JSON array of snapshot nodes.

    Each entry has id, legacyId, role, value (label, else value), name,
    desc, bounds, state (non-default values only) and traits; absent values
    are omitted.
    """
    output = []
    for node in snapshot.nodes:
        entry = {"id": node.node_id, "legacyId": node.legacy_id, "role": node.role.value}
        value = node.label if node.label is not None else node.value
        if value is not None:
            entry["value"] = value
        if node.identifier is not None:
            entry["name"] = node.identifier
        desc = filter_redundant_description(
            node.role_description, node.role.value, node.system_role or ""
        )
        if desc is not None:
            entry["desc"] = desc
        if node.bounds is not None:
            b = node.bounds
            entry["bounds"] = [b.x, b.y, b.width, b.height]
        state = {}
        if node.state.selected:
            state["selected"] = True
        if not node.state.enabled:
            state["enabled"] = False
        if node.state.focused:
            state["focused"] = True
        if state:
            entry["state"] = state
        entry["traits"] = node.traits.model_dump(by_alias=True)
        output.append(entry)

    if pretty:
        return json.dumps(output, indent=2, sort_keys=True, ensure_ascii=False)
    return json.dumps(output, separators=(",", ":"), ensure_ascii=False)
