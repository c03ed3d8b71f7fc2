"""
Raw accessibility nodes as delivered by an element source.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .element import Point, Size


class RawElement(BaseModel):
    """
    Un-normalized accessibility node.

    Carries the platform role string as reported (e.g., "AXButton") and no id.
    """

    role: Optional[str] = Field(default=None, description="Platform role string")
    description: Optional[str] = Field(default=None, description="Accessibility description")
    identifier: Optional[str] = Field(default=None, description="Developer identifier")
    role_description: Optional[str] = Field(
        default=None, description="Localized role description"
    )
    help: Optional[str] = Field(default=None, description="Help text")
    value: Optional[str] = Field(default=None, description="Value, title or label")
    position: Optional[Point] = Field(default=None, description="Top-left position")
    size: Optional[Size] = Field(default=None, description="Width and height")
    selected: bool = Field(default=False, description="Selected state")
    enabled: bool = Field(default=True, description="Enabled state")
    focused: bool = Field(default=False, description="Focused state")
    children: List["RawElement"] = Field(default_factory=list, description="Child nodes")

    @property
    def has_content(self) -> bool:
        """False when role, description, identifier and role description are all absent."""
        return any(
            v is not None
            for v in (self.role, self.description, self.identifier, self.role_description)
        )

    @property
    def is_zero_size(self) -> bool:
        return self.size is not None and self.size.width == 0 and self.size.height == 0
