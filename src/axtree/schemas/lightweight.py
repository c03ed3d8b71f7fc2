"""
Lightweight node schemas.

A lightweight node is either an object (role, value, name, desc, bounds,
state, children, all optional) or a bare group: a container with nothing but
children, serialized as a JSON array.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..tools.accessibility.role_normalizer import Role, SystemRole
from .element import Element, ElementState

ID_KEY = "id"


class NodeObject(BaseModel):
    """Element serialized as a JSON object; a missing role means Group."""

    kind: Literal["object"] = "object"
    id: Optional[str] = Field(default=None, description="Stable id, when emitted")
    role: Optional[str] = Field(default=None, description="Generic role")
    value: Optional[str] = Field(default=None, description="Description or value")
    name: Optional[str] = Field(default=None, description="Developer identifier")
    desc: Optional[str] = Field(default=None, description="Non-redundant role description")
    bounds: Optional[List[int]] = Field(default=None, description="[x, y, width, height]")
    state: Optional[ElementState] = Field(default=None, description="Non-default state")
    children: Optional[List["LightweightNode"]] = Field(default=None)

    def to_data(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.id is not None:
            data[ID_KEY] = self.id
        if self.role is not None:
            data["role"] = self.role
        if self.value is not None:
            data["value"] = self.value
        if self.name is not None:
            data["name"] = self.name
        if self.desc is not None:
            data["desc"] = self.desc
        if self.bounds is not None:
            data["bounds"] = list(self.bounds)
        if self.state is not None and not self.state.is_default:
            data["state"] = self.state.non_default_values()
        if self.children is not None:
            data["children"] = [child.to_data() for child in self.children]
        return data

    def to_element(self) -> Element:
        """
        Map back to an Element.

        A 12-character id is kept; anything else is regenerated from the
        decoded attributes.
        """
        role = Role.parse(self.role) if self.role is not None else Role.GROUP
        data: Dict[str, Any] = {
            "system_role": role.possible_system_roles[0],
            "description": self.value,
            "identifier": self.name,
            "role_description": self.desc,
            "state": self.state,
        }
        if self.id is not None:
            data["id"] = self.id
        if self.bounds is not None and len(self.bounds) == 4:
            x, y, w, h = self.bounds
            data["position"] = {"x": x, "y": y}
            data["size"] = {"width": w, "height": h}
        if self.children is not None:
            data["children"] = [child.to_element() for child in self.children]
        return Element.model_validate(data)


class NodeGroup(BaseModel):
    """Attribute-less container serialized as a bare JSON array."""

    kind: Literal["group"] = "group"
    children: List["LightweightNode"] = Field(default_factory=list)

    def to_data(self) -> List[Any]:
        return [child.to_data() for child in self.children]

    def to_element(self) -> Element:
        return Element.create(
            SystemRole.GROUP,
            children=[child.to_element() for child in self.children] or None,
        )


LightweightNode = Annotated[Union[NodeObject, NodeGroup], Field(discriminator="kind")]

NodeObject.model_rebuild()
NodeGroup.model_rebuild()
