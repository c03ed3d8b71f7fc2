"""
Element source contract.

An element source owns everything platform-specific: permission checks,
process and window enumeration, and reading raw attributes. The core only
sees RawElement trees and the errors below, which it propagates unchanged:
- PermissionDeniedError
- ApplicationNotFoundError
- WindowNotFoundError
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ...errors import ApplicationNotFoundError, WindowNotFoundError
from ...schemas.raw import RawElement
from .role_normalizer import SystemRole, normalize_system_role


class ElementSource(ABC):
    """Provider of raw accessibility trees."""

    @abstractmethod
    def get_tree(
        self, app_identifier: str, window_index: Optional[int] = None
    ) -> RawElement:
        """
        Read the raw tree of an application or one of its windows.

        Args:
            app_identifier: Application identifier (e.g., a bundle id)
            window_index: Window to read, or None for the whole application

        Returns:
            Root raw element

        Raises:
            PermissionDeniedError: If accessibility access is not granted
            ApplicationNotFoundError: If no application matches
            WindowNotFoundError: If the window index is out of range
        """
        ...

    @abstractmethod
    def list_applications(self) -> List[str]:
        """Identifiers of applications the source can read."""
        ...

    @abstractmethod
    def list_windows(self, app_identifier: str) -> List[RawElement]:
        """
        Top-level windows of an application, in index order.

        Raises:
            ApplicationNotFoundError: If no application matches
        """
        ...


class StaticElementSource(ElementSource):
    """
    Serves pre-built raw trees, e.g. parsed dump files.

    Windows are the root's direct children whose role is a window role.
    """

    def __init__(self, trees: Optional[Dict[str, RawElement]] = None):
        self._trees: Dict[str, RawElement] = dict(trees or {})

    def add(self, app_identifier: str, tree: RawElement) -> None:
        self._trees[app_identifier] = tree

    def list_applications(self) -> List[str]:
        return list(self._trees)

    def list_windows(self, app_identifier: str) -> List[RawElement]:
        root = self._require(app_identifier)
        return [
            child
            for child in root.children
            if normalize_system_role(child.role) == SystemRole.WINDOW
        ]

    def get_tree(
        self, app_identifier: str, window_index: Optional[int] = None
    ) -> RawElement:
        root = self._require(app_identifier)
        if window_index is None:
            return root

        windows = self.list_windows(app_identifier)
        if window_index < 0 or window_index >= len(windows):
            raise WindowNotFoundError(window_index, len(windows))
        return windows[window_index]

    def _require(self, app_identifier: str) -> RawElement:
        tree = self._trees.get(app_identifier)
        if tree is None:
            raise ApplicationNotFoundError(app_identifier)
        return tree
