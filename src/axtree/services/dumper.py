"""
Accessibility dump service.

Reads raw trees from an ElementSource through an ElementCache, flattens or
builds them, and encodes the result. Element source errors (permission,
application, window) pass through unchanged.
"""

import logging
from typing import List, Optional, Union

from ..config.tree_config import TreeConfig, get_tree_config
from ..encoding.encoder import encode_flat, encode_tree
from ..query.models import Query
from ..query.parser import parse_query
from ..schemas.element import Element
from ..schemas.raw import RawElement
from ..tools.accessibility.cache_manager import ElementCache
from ..tools.accessibility.flattener import build_element_tree, flatten
from ..tools.accessibility.protocol import ElementSource

logger = logging.getLogger(__name__)


class AccessibilityDumper:
    """
    Flat and hierarchical dumps of application element trees.

    Args:
        source: Provider of raw trees
        cache: Shared raw-tree cache; a private one is created when omitted
        config: Defaults for ceiling, zero-size handling and output format
    """

    def __init__(
        self,
        source: ElementSource,
        cache: Optional[ElementCache] = None,
        config: Optional[TreeConfig] = None,
    ):
        self.source = source
        self.cache = cache if cache is not None else ElementCache()
        self.config = config or get_tree_config()

    def _raw_tree(self, app_identifier: str, window_index: Optional[int]) -> RawElement:
        return self.cache.get_or_load(
            app_identifier,
            lambda: self.source.get_tree(app_identifier, window_index),
            window_index,
        )

    def dump(
        self,
        app_identifier: str,
        query: Optional[Union[str, Query]] = None,
        window_index: Optional[int] = None,
        include_zero_size: Optional[bool] = None,
        max_elements: Optional[int] = None,
    ) -> List[Element]:
        """
        Flatten an application's (or window's) tree.

        Args:
            app_identifier: Application identifier
            query: Query text or compiled Query used to filter elements
            window_index: Restrict to one window
            include_zero_size: Override the configured zero-size handling
            max_elements: Override the configured element ceiling

        Returns:
            Matching elements in pre-order

        Raises:
            QueryParseError: If query text is invalid
            TooManyElementsError: If more elements qualify than allowed
        """
        compiled = parse_query(query) if isinstance(query, str) else query
        tree = self._raw_tree(app_identifier, window_index)

        elements = flatten(
            tree,
            max_elements=max_elements if max_elements is not None else self.config.max_elements,
            include_zero_size=(
                include_zero_size
                if include_zero_size is not None
                else self.config.include_zero_size
            ),
            query=compiled,
        )
        logger.debug(f"Dumped {len(elements)} elements from {app_identifier}")
        return elements

    def dump_tree(
        self, app_identifier: str, window_index: Optional[int] = None
    ) -> Element:
        """Hierarchical element tree with every node kept."""
        return build_element_tree(self._raw_tree(app_identifier, window_index))

    def dump_json(
        self,
        app_identifier: str,
        query: Optional[Union[str, Query]] = None,
        window_index: Optional[int] = None,
        hierarchical: bool = False,
        pretty: Optional[bool] = None,
    ) -> str:
        """
        Lightweight JSON for a flat or hierarchical dump.

        Queries apply to flat dumps only.

        Raises:
            ValueError: If a query is combined with a hierarchical dump
        """
        pretty = self.config.pretty if pretty is None else pretty
        if hierarchical:
            if query is not None:
                raise ValueError("Queries are not supported for hierarchical dumps")
            tree = self.dump_tree(app_identifier, window_index)
            return encode_tree(tree, pretty=pretty, include_ids=self.config.include_ids)
        elements = self.dump(app_identifier, query=query, window_index=window_index)
        return encode_flat(elements, pretty=pretty, include_ids=self.config.include_ids)

    def invalidate(self, app_identifier: Optional[str] = None) -> int:
        """Drop cached trees for one application, or all of them."""
        return self.cache.clear(app_identifier)
