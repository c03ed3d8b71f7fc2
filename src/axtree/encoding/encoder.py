"""
Lightweight JSON encoding of element trees.

Rules:
- absent and default values are omitted, never emitted as null
- role descriptions that merely restate the role (in any supported
  language) are dropped
- a Group with nothing but children becomes a bare JSON array; a Group with
  any other attribute becomes an object without a role key
"""

import json
import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Union

from pydantic import BaseModel, Field, ValidationError

from ..errors import LightweightDecodeError
from ..schemas.element import Element, ElementState
from ..schemas.lightweight import LightweightNode, NodeGroup, NodeObject
from ..tools.accessibility.role_normalizer import Role

logger = logging.getLogger(__name__)

# Japanese, English, Simplified Chinese, Traditional Chinese, Korean
REDUNDANT_ROLE_DESCRIPTIONS: Dict[str, FrozenSet[str]] = {
    "Application": frozenset(
        {"アプリケーション", "Application", "应用程序", "應用程式", "애플리케이션"}
    ),
    "Window": frozenset(
        {
            "標準ウインドウ", "ウインドウ", "ウィンドウ",
            "Window", "Standard Window",
            "窗口", "标准窗口",
            "視窗", "標準視窗",
            "윈도우", "창",
        }
    ),
    "MenuItem": frozenset(
        {
            "メニュー項目", "メニューアイテム",
            "Menu Item", "MenuItem",
            "菜单项",
            "選單項目",
            "메뉴 항목",
        }
    ),
    "MenuBarItem": frozenset(
        {
            "メニューバー項目", "メニューバーアイテム",
            "Menu Bar Item", "MenuBar Item",
            "菜单栏项",
            "選單列項目",
            "메뉴 바 항목",
        }
    ),
    "Menu": frozenset({"メニュー", "Menu", "菜单", "選單", "메뉴"}),
    "Toolbar": frozenset(
        {"ツールバー", "Toolbar", "Tool Bar", "工具栏", "工具列", "툴바", "도구 모음"}
    ),
    "MenuBar": frozenset(
        {"メニューバー", "Menu Bar", "MenuBar", "菜单栏", "選單列", "메뉴 바"}
    ),
    "Button": frozenset({"ボタン", "Button", "按钮", "按鈕", "버튼"}),
    "Text": frozenset(
        {
            "テキスト", "静的テキスト",
            "Text", "Static Text",
            "文本", "静态文本",
            "文字", "靜態文字",
            "텍스트", "정적 텍스트",
        }
    ),
    "Image": frozenset({"イメージ", "画像", "Image", "图像", "圖像", "이미지"}),
    "Field": frozenset(
        {
            "テキストフィールド", "フィールド",
            "Text Field", "TextField", "Field",
            "文本框", "文本字段",
            "文字欄位", "文字框",
            "텍스트 필드", "필드",
        }
    ),
    "Check": frozenset(
        {
            "チェックボックス",
            "Check Box", "Checkbox", "CheckBox",
            "复选框",
            "核取方塊",
            "체크박스", "체크 박스",
        }
    ),
    "Radio": frozenset(
        {"ラジオボタン", "Radio Button", "RadioButton", "单选按钮", "單選按鈕", "라디오 버튼"}
    ),
    "Slider": frozenset({"スライダー", "Slider", "滑块", "滑桿", "슬라이더"}),
    "PopUp": frozenset(
        {
            "ポップアップボタン", "ポップアップ",
            "Pop Up Button", "PopUp Button", "Popup Button",
            "弹出按钮",
            "彈出按鈕",
            "팝업 버튼",
        }
    ),
    "Tab": frozenset({"タブ", "Tab", "标签", "標籤", "탭"}),
    "Link": frozenset({"リンク", "Link", "链接", "連結", "링크"}),
    "Scroll": frozenset(
        {
            "スクロールエリア", "スクロール領域",
            "Scroll Area", "ScrollArea",
            "滚动区域",
            "捲動區域",
            "스크롤 영역",
        }
    ),
}


class ConversionStats(BaseModel):
    """Size comparison between a source representation and its encoding."""

    original_size: int = Field(description="Source size in UTF-8 bytes")
    encoded_size: int = Field(description="Encoded size in UTF-8 bytes")
    saved_bytes: int = Field(description="Bytes saved by encoding")
    savings_ratio: float = Field(description="Fraction of the source saved (0-1)")


def filter_redundant_description(
    role_description: Optional[str], *roles: str
) -> Optional[str]:
    """
    Drop a role description that only restates the role.

    Args:
        role_description: Localized role description
        roles: Role names to check against (generic and system)

    Returns:
        The trimmed description, or None when it is empty or redundant
    """
    if role_description is None:
        return None
    trimmed = role_description.strip()
    if not trimmed:
        return None
    for role in roles:
        if trimmed in REDUNDANT_ROLE_DESCRIPTIONS.get(role, frozenset()):
            return None
    return trimmed


def is_group_minimal(
    value: Optional[str],
    name: Optional[str],
    desc: Optional[str],
    bounds: Optional[List[int]],
    state: Optional[ElementState],
    children: Optional[List[Any]],
) -> bool:
    """True when a Group carries nothing but a non-empty child list."""
    has_attributes = (
        value is not None
        or name is not None
        or desc is not None
        or bounds is not None
        or (state is not None and not state.is_default)
    )
    return not has_attributes and bool(children)


def to_lightweight(element: Element, include_ids: bool = False) -> LightweightNode:
    """
    Convert an element tree to lightweight nodes.

    Args:
        element: Root element
        include_ids: Emit each element's stable id

    Returns:
        NodeGroup for attribute-less Groups, NodeObject otherwise
    """
    value = element.description if element.description is not None else element.value
    desc = filter_redundant_description(
        element.role_description, element.role.value, element.system_role.value
    )
    bounds = element.bounds
    state = element.state
    children = (
        [to_lightweight(child, include_ids) for child in element.children]
        if element.children
        else None
    )

    if element.role == Role.GROUP:
        if is_group_minimal(value, element.identifier, desc, bounds, state, children):
            return NodeGroup(children=children)
        role = None
    else:
        role = element.role.value

    return NodeObject(
        id=element.id if include_ids else None,
        role=role,
        value=value,
        name=element.identifier,
        desc=desc,
        bounds=bounds,
        state=state,
        children=children,
    )


def _dumps(data: Any, pretty: bool) -> str:
    if pretty:
        return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def encode_tree(element: Element, pretty: bool = False, include_ids: bool = False) -> str:
    """Encode a hierarchical element tree as lightweight JSON."""
    return _dumps(to_lightweight(element, include_ids).to_data(), pretty)


def encode_flat(
    elements: Sequence[Element], pretty: bool = False, include_ids: bool = False
) -> str:
    """Encode a flat element list as a lightweight JSON array."""
    data = [to_lightweight(e, include_ids).to_data() for e in elements]
    logger.debug(f"Encoded {len(data)} flat elements")
    return _dumps(data, pretty)


def _node_from_data(data: Any) -> LightweightNode:
    if isinstance(data, list):
        return NodeGroup(children=[_node_from_data(item) for item in data])
    if isinstance(data, dict):
        fields = dict(data)
        children = fields.pop("children", None)
        if children is not None and not isinstance(children, list):
            raise LightweightDecodeError("'children' must be an array")
        try:
            node = NodeObject.model_validate(fields)
        except ValidationError as e:
            raise LightweightDecodeError(f"Invalid node: {e}") from e
        if children is not None:
            node = node.model_copy(
                update={"children": [_node_from_data(c) for c in children]}
            )
        return node
    raise LightweightDecodeError(f"Unexpected JSON value of type {type(data).__name__}")


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LightweightDecodeError(f"Invalid JSON: {e}") from e


def decode_tree(text: str) -> LightweightNode:
    """
    Decode hierarchical lightweight JSON.

    A top-level array is a bare Group.

    Raises:
        LightweightDecodeError: If the text is not a lightweight node tree
    """
    return _node_from_data(_loads(text))


def decode_flat(text: str) -> List[LightweightNode]:
    """
    Decode a flat lightweight element list.

    Raises:
        LightweightDecodeError: If the text is not an array of nodes
    """
    data = _loads(text)
    if not isinstance(data, list):
        raise LightweightDecodeError("Flat lightweight JSON must be an array")
    return [_node_from_data(item) for item in data]


def conversion_stats(
    original: Union[str, bytes], encoded: Union[str, bytes]
) -> ConversionStats:
    """Compare the UTF-8 sizes of a source and its encoding."""
    original_size = len(original.encode("utf-8") if isinstance(original, str) else original)
    encoded_size = len(encoded.encode("utf-8") if isinstance(encoded, str) else encoded)
    saved = original_size - encoded_size
    ratio = saved / original_size if original_size else 0.0
    return ConversionStats(
        original_size=original_size,
        encoded_size=encoded_size,
        saved_bytes=saved,
        savings_ratio=ratio,
    )
