"""
One-shot conversion of text dumps to lightweight JSON.
"""

from ..encoding.encoder import encode_tree
from ..tools.accessibility.dump_parser import parse_dump
from ..tools.accessibility.flattener import build_element_tree


def convert_dump(text: str, pretty: bool = False, include_ids: bool = False) -> str:
    """
    Parse a text dump and encode its full hierarchy.

    Args:
        text: Indented "Key: Value" accessibility dump
        pretty: Indent output and sort keys
        include_ids: Emit stable ids

    Returns:
        Lightweight JSON

    Raises:
        DumpParseError: If the dump is empty
    """
    tree = build_element_tree(parse_dump(text))
    return encode_tree(tree, pretty=pretty, include_ids=include_ids)
