"""
Element models for normalized accessibility trees.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..tools.accessibility.element_id import compute_element_id, is_current_id
from ..tools.accessibility.role_normalizer import Role, SystemRole


class Point(BaseModel):
    """Screen coordinate."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Horizontal coordinate")
    y: float = Field(description="Vertical coordinate")


class Size(BaseModel):
    """Element extent."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(description="Width in points")
    height: float = Field(description="Height in points")


class ElementState(BaseModel):
    """
    Boolean element state.

    Defaults are selected=False, enabled=True, focused=False. A state equal
    to the defaults is never stored on an Element.
    """

    model_config = ConfigDict(frozen=True)

    selected: bool = Field(default=False, description="Whether the element is selected")
    enabled: bool = Field(default=True, description="Whether the element is enabled")
    focused: bool = Field(default=False, description="Whether the element has focus")

    @property
    def is_default(self) -> bool:
        return not self.selected and self.enabled and not self.focused

    @classmethod
    def create(
        cls, selected: bool = False, enabled: bool = True, focused: bool = False
    ) -> Optional["ElementState"]:
        """Return a state, or None when all three values are the defaults."""
        state = cls(selected=selected, enabled=enabled, focused=focused)
        return None if state.is_default else state

    def non_default_values(self) -> Dict[str, bool]:
        """Only the values that differ from the defaults."""
        values: Dict[str, bool] = {}
        if self.selected:
            values["selected"] = True
        if not self.enabled:
            values["enabled"] = False
        if self.focused:
            values["focused"] = True
        return values


def _pick(data: Dict[str, Any], name: str) -> Any:
    value = data.get(name)
    if value is None:
        value = data.get(to_camel(name))
    return value


def _pair(value: Any, first: str, second: str) -> Optional[Tuple[float, float]]:
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return (float(getattr(value, first)), float(getattr(value, second)))
    if isinstance(value, dict):
        return (float(value[first]), float(value[second]))
    return (float(value[0]), float(value[1]))


def _resolve_system_role(data: Dict[str, Any]) -> SystemRole:
    raw = _pick(data, "system_role")
    if isinstance(raw, SystemRole):
        return raw
    if raw is not None:
        try:
            return SystemRole(raw)
        except ValueError:
            pass
    role = data.get("role")
    if role is None:
        return SystemRole.UNKNOWN
    return Role.parse(str(role)).possible_system_roles[0]


class Element(BaseModel):
    """
    Immutable, normalized UI element.

    The id is computed once from the identity tuple (system role, identifier,
    description, role description, help, position, size). Decoded ids that
    are missing or shorter than the current 12-character scheme are
    regenerated. The generic role is derived from the system role.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Stable 12-character id")
    system_role: SystemRole = Field(
        default=SystemRole.UNKNOWN, description="Platform role without vendor prefix"
    )
    description: Optional[str] = Field(default=None, description="Accessibility description")
    identifier: Optional[str] = Field(default=None, description="Developer identifier")
    role_description: Optional[str] = Field(
        default=None, description="Localized role description"
    )
    help: Optional[str] = Field(default=None, description="Help text")
    value: Optional[str] = Field(default=None, description="Current value")
    position: Optional[Point] = Field(default=None, description="Top-left position")
    size: Optional[Size] = Field(default=None, description="Width and height")
    state: Optional[ElementState] = Field(
        default=None, description="Non-default state, absent when default"
    )
    children: Optional[List["Element"]] = Field(
        default=None, description="Ordered child elements"
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_identity(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        system_role = _resolve_system_role(data)
        data.pop("systemRole", None)
        data.pop("role", None)
        data["system_role"] = system_role

        current = data.get("id")
        if not is_current_id(current):
            data["id"] = compute_element_id(
                system_role.value,
                identifier=_pick(data, "identifier"),
                description=_pick(data, "description"),
                role_description=_pick(data, "role_description"),
                help_text=_pick(data, "help"),
                position=_pair(_pick(data, "position"), "x", "y"),
                size=_pair(_pick(data, "size"), "width", "height"),
            )
        return data

    @field_validator("state")
    @classmethod
    def _drop_default_state(cls, value: Optional[ElementState]) -> Optional[ElementState]:
        if value is not None and value.is_default:
            return None
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def role(self) -> Role:
        return self.system_role.generic

    @classmethod
    def create(
        cls,
        system_role: SystemRole,
        description: Optional[str] = None,
        identifier: Optional[str] = None,
        role_description: Optional[str] = None,
        help: Optional[str] = None,
        value: Optional[str] = None,
        position: Optional[Point] = None,
        size: Optional[Size] = None,
        selected: bool = False,
        enabled: bool = True,
        focused: bool = False,
        children: Optional[List["Element"]] = None,
    ) -> "Element":
        """
        Build an element from normalized attributes.

        The id and the non-default state are derived here; callers never
        supply them.
        """
        return cls(
            system_role=system_role,
            description=description,
            identifier=identifier,
            role_description=role_description,
            help=help,
            value=value,
            position=position,
            size=size,
            state=ElementState.create(selected, enabled, focused),
            children=children,
        )

    @property
    def bounds(self) -> Optional[List[int]]:
        """Integer [x, y, width, height], absent unless both position and size are."""
        if self.position is None or self.size is None:
            return None
        return [
            int(self.position.x),
            int(self.position.y),
            int(self.size.width),
            int(self.size.height),
        ]

    @property
    def frame(self) -> Optional[Tuple[float, float, float, float]]:
        """Floating-point (x, y, width, height) used for spatial matching."""
        if self.position is None or self.size is None:
            return None
        return (self.position.x, self.position.y, self.size.width, self.size.height)

    @property
    def selected(self) -> bool:
        return self.state.selected if self.state else False

    @property
    def enabled(self) -> bool:
        return self.state.enabled if self.state else True

    @property
    def focused(self) -> bool:
        return self.state.focused if self.state else False

    @property
    def is_interactive(self) -> bool:
        return self.system_role.is_interactive

    def to_json(self, pretty: bool = False) -> str:
        """Full-fidelity camelCase JSON with absent fields omitted."""
        return self.model_dump_json(
            by_alias=True, exclude_none=True, indent=2 if pretty else None
        )

    @classmethod
    def from_json(cls, text: str) -> "Element":
        return cls.model_validate_json(text)
