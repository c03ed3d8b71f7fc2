"""
Tests for the accessibility dump service.
"""

import json

import pytest

from axtree.config import TreeConfig
from axtree.errors import (
    ApplicationNotFoundError,
    PermissionDeniedError,
    QueryParseError,
    TooManyElementsError,
    WindowNotFoundError,
)
from axtree.query import Query
from axtree.services import AccessibilityDumper
from axtree.tools.accessibility.cache_manager import ElementCache
from axtree.tools.accessibility.protocol import StaticElementSource
from axtree.tools.accessibility.role_normalizer import Role

APP = "com.example.editor"


class CountingSource(StaticElementSource):
    """Static source that records how often trees are read."""

    def __init__(self, trees):
        super().__init__(trees)
        self.reads = 0

    def get_tree(self, app_identifier, window_index=None):
        self.reads += 1
        return super().get_tree(app_identifier, window_index)


class DeniedSource(StaticElementSource):
    def get_tree(self, app_identifier, window_index=None):
        raise PermissionDeniedError()


@pytest.fixture
def source(raw):
    tree = raw(
        "AXApplication",
        description="Editor",
        children=[
            raw(
                "AXWindow",
                children=[
                    raw("AXButton", description="Save", position=(10, 20), size=(80, 30)),
                    raw("AXStaticText", description="Hello"),
                ],
            ),
            raw("AXWindow", children=[raw("AXButton", description="Open")]),
        ],
    )
    return CountingSource({APP: tree})


@pytest.fixture
def dumper(source):
    return AccessibilityDumper(source, ElementCache(), TreeConfig())


class TestDump:
    """Flat dumps."""

    def test_whole_application(self, dumper):
        elements = dumper.dump(APP)
        assert len(elements) == 6
        assert elements[0].role == Role.APPLICATION

    def test_query_text(self, dumper):
        elements = dumper.dump(APP, query="role=Button")
        assert [e.description for e in elements] == ["Save", "Open"]

    def test_query_object(self, dumper):
        elements = dumper.dump(APP, query=Query.button("Open"))
        assert [e.description for e in elements] == ["Open"]

    def test_invalid_query(self, dumper):
        with pytest.raises(QueryParseError):
            dumper.dump(APP, query="colour=red")

    def test_window(self, dumper):
        assert [e.description for e in dumper.dump(APP, window_index=0)] == [
            None,
            "Save",
            "Hello",
        ]
        assert [e.description for e in dumper.dump(APP, window_index=1)] == [None, "Open"]

    def test_window_out_of_range(self, dumper):
        with pytest.raises(WindowNotFoundError):
            dumper.dump(APP, window_index=2)

    def test_unknown_application(self, dumper):
        with pytest.raises(ApplicationNotFoundError):
            dumper.dump("com.example.missing")

    def test_permission_denied_propagates(self):
        dumper = AccessibilityDumper(DeniedSource(), ElementCache(), TreeConfig())
        with pytest.raises(PermissionDeniedError):
            dumper.dump(APP)

    def test_max_elements_override(self, dumper):
        with pytest.raises(TooManyElementsError) as exc_info:
            dumper.dump(APP, max_elements=3)
        assert exc_info.value.limit == 3

    def test_configured_ceiling(self, source):
        dumper = AccessibilityDumper(source, ElementCache(), TreeConfig(max_elements=2))
        with pytest.raises(TooManyElementsError):
            dumper.dump(APP)


class TestCaching:
    """Raw trees are read once per key until invalidated."""

    def test_tree_read_once(self, dumper, source):
        dumper.dump(APP)
        dumper.dump(APP, query="role=Button")
        assert source.reads == 1

    def test_windows_cached_separately(self, dumper, source):
        dumper.dump(APP)
        dumper.dump(APP, window_index=0)
        dumper.dump(APP, window_index=0)
        assert source.reads == 2

    def test_invalidate(self, dumper, source):
        dumper.dump(APP)
        dumper.dump(APP, window_index=1)
        assert dumper.invalidate(APP) == 2
        dumper.dump(APP)
        assert source.reads == 3

    def test_shared_cache(self, source):
        cache = ElementCache()
        AccessibilityDumper(source, cache, TreeConfig()).dump(APP)
        AccessibilityDumper(source, cache, TreeConfig()).dump(APP)
        assert source.reads == 1


class TestDumpJson:
    """Encoded output."""

    def test_flat(self, dumper):
        data = json.loads(dumper.dump_json(APP, query="role=Button"))
        assert data == [
            {"role": "Button", "value": "Save", "bounds": [10, 20, 80, 30]},
            {"role": "Button", "value": "Open"},
        ]

    def test_hierarchical(self, dumper):
        data = json.loads(dumper.dump_json(APP, hierarchical=True))
        assert data["role"] == "Application"
        assert [w["role"] for w in data["children"]] == ["Window", "Window"]

    def test_hierarchical_rejects_query(self, dumper):
        with pytest.raises(ValueError):
            dumper.dump_json(APP, query="role=Button", hierarchical=True)

    def test_ids_from_config(self, source):
        dumper = AccessibilityDumper(source, ElementCache(), TreeConfig(include_ids=True))
        data = json.loads(dumper.dump_json(APP, query="role=Button"))
        assert all(len(item["id"]) == 12 for item in data)

    def test_pretty(self, dumper):
        assert dumper.dump_json(APP, pretty=True).startswith("[\n")
