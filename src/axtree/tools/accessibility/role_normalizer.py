"""
Role normalization for accessibility elements.

Platform roles (AXButton, AXStaticText, ...) are first mapped onto a
SystemRole, which keeps the platform vocabulary without the "AX" prefix.
Each SystemRole then maps many-to-one onto a generic Role, the small and
stable vocabulary exposed to callers.

Semantically distinct containers (toolbars, tab groups, menu bars, split
groups) keep their own generic Role. Only layout wrappers collapse to Group,
which the flattener and the encoder both treat as structural.
"""

from enum import Enum
from typing import Dict, List, Optional

VENDOR_PREFIX = "AX"


class SystemRole(str, Enum):
    """Platform-level element roles with the vendor prefix removed."""

    # Application and system
    APPLICATION = "Application"
    SYSTEM_WIDE = "SystemWide"

    # Windows and containers
    WINDOW = "Window"
    SHEET = "Sheet"
    DRAWER = "Drawer"
    POPOVER = "Popover"

    # Layout and grouping
    GROUP = "Group"
    LAYOUT_AREA = "LayoutArea"
    LAYOUT_ITEM = "LayoutItem"
    MATTE = "Matte"
    GROW_AREA = "GrowArea"

    # Controls
    BUTTON = "Button"
    POP_UP_BUTTON = "PopUpButton"
    MENU_BUTTON = "MenuButton"
    CHECK_BOX = "CheckBox"
    RADIO_BUTTON = "RadioButton"
    RADIO_GROUP = "RadioGroup"
    SLIDER = "Slider"
    INCREMENTOR = "Incrementor"
    COMBO_BOX = "ComboBox"
    DISCLOSURE_TRIANGLE = "DisclosureTriangle"
    COLOR_WELL = "ColorWell"
    LINK = "Link"

    # Text
    TEXT_FIELD = "TextField"
    TEXT_AREA = "TextArea"
    STATIC_TEXT = "StaticText"

    # Indicators
    BUSY_INDICATOR = "BusyIndicator"
    PROGRESS_INDICATOR = "ProgressIndicator"
    LEVEL_INDICATOR = "LevelIndicator"
    VALUE_INDICATOR = "ValueIndicator"
    RELEVANCE_INDICATOR = "RelevanceIndicator"

    # Collections and tables
    LIST = "List"
    TABLE = "Table"
    OUTLINE = "Outline"
    GRID = "Grid"
    BROWSER = "Browser"
    CELL = "Cell"
    ROW = "Row"
    COLUMN = "Column"

    # Navigation and menus
    MENU = "Menu"
    MENU_BAR = "MenuBar"
    MENU_BAR_ITEM = "MenuBarItem"
    MENU_ITEM = "MenuItem"
    TOOLBAR = "Toolbar"
    TAB_GROUP = "TabGroup"

    # Scrolling and splitting
    SCROLL_AREA = "ScrollArea"
    SCROLL_BAR = "ScrollBar"
    SPLITTER = "Splitter"
    SPLIT_GROUP = "SplitGroup"
    HANDLE = "Handle"

    IMAGE = "Image"
    RULER = "Ruler"
    RULER_MARKER = "RulerMarker"
    HELP_TAG = "HelpTag"

    # Web content
    PAGE_ROLE = "PageRole"
    WEB_AREA_ROLE = "WebAreaRole"
    HEADING_ROLE = "HeadingRole"
    LIST_MARKER_ROLE = "ListMarkerRole"
    DATE_TIME_AREA_ROLE = "DateTimeAreaRole"

    # Already-normalized short forms
    TEXT = "Text"
    SCROLL = "Scroll"
    FIELD = "Field"
    CHECK = "Check"
    RADIO = "Radio"
    POP_UP = "PopUp"
    GENERIC = "Generic"

    UNKNOWN = "Unknown"

    @property
    def generic(self) -> "Role":
        """Generic role this system role collapses to."""
        return generic_role(self)

    @property
    def is_interactive(self) -> bool:
        return self in _INTERACTIVE_SYSTEM_ROLES


class Role(str, Enum):
    """Generic, externally stable element roles."""

    # Interactive
    BUTTON = "Button"
    FIELD = "Field"
    CHECK = "Check"
    RADIO = "Radio"
    SLIDER = "Slider"
    POP_UP = "PopUp"
    COMBO_BOX = "ComboBox"
    DISCLOSURE = "Disclosure"
    LINK = "Link"
    MENU_ITEM = "MenuItem"

    # Content
    TEXT = "Text"
    IMAGE = "Image"

    # Containers
    GROUP = "Group"
    TOOLBAR = "Toolbar"
    TAB_GROUP = "TabGroup"
    MENU_BAR = "MenuBar"
    SPLIT_GROUP = "SplitGroup"
    OUTLINE = "Outline"
    LIST = "List"
    TABLE = "Table"
    GRID = "Grid"
    MENU = "Menu"
    WINDOW = "Window"
    CELL = "Cell"
    ROW = "Row"
    COLUMN = "Column"

    SCROLL = "Scroll"

    GENERIC = "Generic"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """
        Flexibly resolve a role name.

        Accepts canonical names, platform names and common aliases
        ("btn", "input", "TextField", "checkbox", "dropdown", ...).
        Anything unrecognized resolves to UNKNOWN.

        Args:
            value: Role name in any supported spelling

        Returns:
            Matching generic Role
        """
        if not value:
            return cls.UNKNOWN

        clean = strip_vendor_prefix(value.strip())
        direct = _ROLE_BY_VALUE.get(clean)
        if direct is not None:
            return direct

        return _ROLE_ALIASES.get(clean.lower(), cls.UNKNOWN)

    @property
    def possible_system_roles(self) -> List[SystemRole]:
        """System roles that collapse to this generic role, canonical first."""
        return _SYSTEM_ROLES_BY_GENERIC.get(self, [SystemRole.UNKNOWN])

    @property
    def is_interactive(self) -> bool:
        return self in _INTERACTIVE_ROLES


def strip_vendor_prefix(role: str) -> str:
    """Remove the 2-character "AX" vendor marker if present."""
    if role.startswith(VENDOR_PREFIX) and len(role) > len(VENDOR_PREFIX):
        return role[len(VENDOR_PREFIX):]
    return role


def normalize_system_role(raw_role: Optional[str]) -> SystemRole:
    """
    Map a platform role string onto a SystemRole.

    Tries a direct lookup, then a lookup without the vendor prefix, then a
    case-insensitive lookup. Unrecognized roles become UNKNOWN.

    Args:
        raw_role: Platform role (e.g., "AXButton", "button", "StaticText")

    Returns:
        Normalized SystemRole
    """
    if not raw_role:
        return SystemRole.UNKNOWN

    direct = _SYSTEM_ROLE_BY_VALUE.get(raw_role)
    if direct is not None:
        return direct

    clean = strip_vendor_prefix(raw_role.strip())
    direct = _SYSTEM_ROLE_BY_VALUE.get(clean)
    if direct is not None:
        return direct

    return _SYSTEM_ROLE_BY_LOWER.get(clean.lower(), SystemRole.UNKNOWN)


def generic_role(system_role: SystemRole) -> Role:
    """
    Derive the generic role for a system role.

    Args:
        system_role: Normalized system role

    Returns:
        Generic Role; roles without an explicit mapping resolve by name
    """
    mapped = _GENERIC_BY_SYSTEM_ROLE.get(system_role)
    if mapped is not None:
        return mapped
    return Role.parse(system_role.value)


def normalize_role(raw_role: Optional[str]) -> Role:
    """Map a platform role string straight to its generic role."""
    return generic_role(normalize_system_role(raw_role))


_SYSTEM_ROLE_BY_VALUE: Dict[str, SystemRole] = {r.value: r for r in SystemRole}

_SYSTEM_ROLE_BY_LOWER: Dict[str, SystemRole] = {
    r.value.lower(): r for r in SystemRole
}
_SYSTEM_ROLE_BY_LOWER["genericelement"] = SystemRole.GENERIC

_ROLE_BY_VALUE: Dict[str, Role] = {r.value: r for r in Role}

_ROLE_ALIASES: Dict[str, Role] = {
    "button": Role.BUTTON,
    "btn": Role.BUTTON,
    "field": Role.FIELD,
    "textfield": Role.FIELD,
    "textarea": Role.FIELD,
    "text field": Role.FIELD,
    "text area": Role.FIELD,
    "input": Role.FIELD,
    "check": Role.CHECK,
    "checkbox": Role.CHECK,
    "check box": Role.CHECK,
    "radio": Role.RADIO,
    "radiobutton": Role.RADIO,
    "radio button": Role.RADIO,
    "popup": Role.POP_UP,
    "popupbutton": Role.POP_UP,
    "dropdown": Role.POP_UP,
    "select": Role.POP_UP,
    "combobox": Role.COMBO_BOX,
    "combo box": Role.COMBO_BOX,
    "disclosure": Role.DISCLOSURE,
    "disclosuretriangle": Role.DISCLOSURE,
    "disclosure triangle": Role.DISCLOSURE,
    "menuitem": Role.MENU_ITEM,
    "menu item": Role.MENU_ITEM,
    "menubaritem": Role.MENU_ITEM,
    "menu bar item": Role.MENU_ITEM,
    "text": Role.TEXT,
    "statictext": Role.TEXT,
    "static text": Role.TEXT,
    "label": Role.TEXT,
    "heading": Role.TEXT,
    "group": Role.GROUP,
    "container": Role.GROUP,
    "panel": Role.GROUP,
    "section": Role.GROUP,
    "toolbar": Role.TOOLBAR,
    "tool bar": Role.TOOLBAR,
    "tabgroup": Role.TAB_GROUP,
    "tab group": Role.TAB_GROUP,
    "menubar": Role.MENU_BAR,
    "menu bar": Role.MENU_BAR,
    "splitgroup": Role.SPLIT_GROUP,
    "split group": Role.SPLIT_GROUP,
    "outline": Role.OUTLINE,
    "tree": Role.OUTLINE,
    "treeview": Role.OUTLINE,
    "scroll": Role.SCROLL,
    "scrollarea": Role.SCROLL,
    "scrollbar": Role.SCROLL,
    "list": Role.LIST,
    "listbox": Role.LIST,
    "table": Role.TABLE,
    "grid": Role.GRID,
    "cell": Role.CELL,
    "row": Role.ROW,
    "column": Role.COLUMN,
    "menu": Role.MENU,
    "window": Role.WINDOW,
    "dialog": Role.WINDOW,
    "sheet": Role.WINDOW,
    "image": Role.IMAGE,
    "picture": Role.IMAGE,
    "photo": Role.IMAGE,
    "link": Role.LINK,
    "hyperlink": Role.LINK,
    "url": Role.LINK,
    "slider": Role.SLIDER,
    "range": Role.SLIDER,
    "generic": Role.GENERIC,
    "element": Role.GENERIC,
    "unknown": Role.UNKNOWN,
}

_GENERIC_BY_SYSTEM_ROLE: Dict[SystemRole, Role] = {
    SystemRole.STATIC_TEXT: Role.TEXT,
    SystemRole.HEADING_ROLE: Role.TEXT,
    SystemRole.LIST_MARKER_ROLE: Role.TEXT,
    SystemRole.HELP_TAG: Role.TEXT,
    SystemRole.SCROLL_AREA: Role.SCROLL,
    SystemRole.SCROLL_BAR: Role.SCROLL,
    SystemRole.TEXT_FIELD: Role.FIELD,
    SystemRole.TEXT_AREA: Role.FIELD,
    SystemRole.CHECK_BOX: Role.CHECK,
    SystemRole.RADIO_BUTTON: Role.RADIO,
    SystemRole.POP_UP_BUTTON: Role.POP_UP,
    SystemRole.MENU_BUTTON: Role.BUTTON,
    SystemRole.INCREMENTOR: Role.BUTTON,
    SystemRole.DISCLOSURE_TRIANGLE: Role.DISCLOSURE,
    SystemRole.COMBO_BOX: Role.COMBO_BOX,
    SystemRole.TOOLBAR: Role.TOOLBAR,
    SystemRole.TAB_GROUP: Role.TAB_GROUP,
    SystemRole.MENU_BAR: Role.MENU_BAR,
    SystemRole.SPLIT_GROUP: Role.SPLIT_GROUP,
    SystemRole.MENU_ITEM: Role.MENU_ITEM,
    SystemRole.MENU_BAR_ITEM: Role.MENU_ITEM,
    SystemRole.OUTLINE: Role.OUTLINE,
    SystemRole.CELL: Role.CELL,
    SystemRole.ROW: Role.ROW,
    SystemRole.COLUMN: Role.COLUMN,
    SystemRole.RADIO_GROUP: Role.GROUP,
    SystemRole.LAYOUT_AREA: Role.GROUP,
    SystemRole.LAYOUT_ITEM: Role.GROUP,
    SystemRole.WEB_AREA_ROLE: Role.GROUP,
    SystemRole.PAGE_ROLE: Role.GROUP,
    SystemRole.MATTE: Role.GROUP,
    SystemRole.BUSY_INDICATOR: Role.GENERIC,
    SystemRole.PROGRESS_INDICATOR: Role.GENERIC,
    SystemRole.LEVEL_INDICATOR: Role.GENERIC,
    SystemRole.VALUE_INDICATOR: Role.GENERIC,
    SystemRole.GROW_AREA: Role.GENERIC,
    SystemRole.HANDLE: Role.GENERIC,
    SystemRole.SPLITTER: Role.GENERIC,
    SystemRole.RULER: Role.GENERIC,
    SystemRole.RULER_MARKER: Role.GENERIC,
}

_SYSTEM_ROLES_BY_GENERIC: Dict[Role, List[SystemRole]] = {
    Role.BUTTON: [SystemRole.BUTTON, SystemRole.MENU_BUTTON, SystemRole.INCREMENTOR],
    Role.FIELD: [SystemRole.TEXT_FIELD, SystemRole.TEXT_AREA, SystemRole.FIELD],
    Role.CHECK: [SystemRole.CHECK_BOX, SystemRole.CHECK],
    Role.RADIO: [SystemRole.RADIO_BUTTON, SystemRole.RADIO],
    Role.POP_UP: [SystemRole.POP_UP_BUTTON, SystemRole.POP_UP],
    Role.COMBO_BOX: [SystemRole.COMBO_BOX],
    Role.DISCLOSURE: [SystemRole.DISCLOSURE_TRIANGLE],
    Role.MENU_ITEM: [SystemRole.MENU_ITEM, SystemRole.MENU_BAR_ITEM],
    Role.TEXT: [
        SystemRole.STATIC_TEXT,
        SystemRole.HEADING_ROLE,
        SystemRole.LIST_MARKER_ROLE,
        SystemRole.HELP_TAG,
        SystemRole.TEXT,
    ],
    Role.GROUP: [
        SystemRole.GROUP,
        SystemRole.RADIO_GROUP,
        SystemRole.LAYOUT_AREA,
        SystemRole.LAYOUT_ITEM,
        SystemRole.WEB_AREA_ROLE,
        SystemRole.PAGE_ROLE,
        SystemRole.MATTE,
    ],
    Role.TOOLBAR: [SystemRole.TOOLBAR],
    Role.TAB_GROUP: [SystemRole.TAB_GROUP],
    Role.MENU_BAR: [SystemRole.MENU_BAR],
    Role.SPLIT_GROUP: [SystemRole.SPLIT_GROUP],
    Role.OUTLINE: [SystemRole.OUTLINE],
    Role.CELL: [SystemRole.CELL],
    Role.ROW: [SystemRole.ROW],
    Role.COLUMN: [SystemRole.COLUMN],
    Role.SCROLL: [SystemRole.SCROLL_AREA, SystemRole.SCROLL_BAR, SystemRole.SCROLL],
    Role.LIST: [SystemRole.LIST],
    Role.TABLE: [SystemRole.TABLE],
    Role.GRID: [SystemRole.GRID],
    Role.MENU: [SystemRole.MENU],
    Role.WINDOW: [SystemRole.WINDOW, SystemRole.SHEET, SystemRole.DRAWER, SystemRole.POPOVER],
    Role.IMAGE: [SystemRole.IMAGE],
    Role.LINK: [SystemRole.LINK],
    Role.SLIDER: [SystemRole.SLIDER],
    Role.GENERIC: [
        SystemRole.GENERIC,
        SystemRole.BUSY_INDICATOR,
        SystemRole.PROGRESS_INDICATOR,
        SystemRole.LEVEL_INDICATOR,
        SystemRole.VALUE_INDICATOR,
        SystemRole.GROW_AREA,
        SystemRole.HANDLE,
        SystemRole.SPLITTER,
        SystemRole.RULER,
        SystemRole.RULER_MARKER,
    ],
    Role.UNKNOWN: [SystemRole.UNKNOWN],
}

_INTERACTIVE_SYSTEM_ROLES = frozenset(
    {
        SystemRole.BUTTON,
        SystemRole.POP_UP_BUTTON,
        SystemRole.MENU_BUTTON,
        SystemRole.CHECK_BOX,
        SystemRole.RADIO_BUTTON,
        SystemRole.SLIDER,
        SystemRole.INCREMENTOR,
        SystemRole.COMBO_BOX,
        SystemRole.DISCLOSURE_TRIANGLE,
        SystemRole.COLOR_WELL,
        SystemRole.LINK,
        SystemRole.TEXT_FIELD,
        SystemRole.TEXT_AREA,
        SystemRole.MENU_ITEM,
        SystemRole.MENU_BAR_ITEM,
        SystemRole.CHECK,
        SystemRole.RADIO,
        SystemRole.POP_UP,
        SystemRole.FIELD,
    }
)

_INTERACTIVE_ROLES = frozenset(
    {
        Role.BUTTON,
        Role.FIELD,
        Role.CHECK,
        Role.RADIO,
        Role.SLIDER,
        Role.POP_UP,
        Role.COMBO_BOX,
        Role.DISCLOSURE,
        Role.MENU_ITEM,
        Role.LINK,
    }
)
