"""Tests for LocalFileStore."""

from __future__ import annotations

from pathlib import Path

import pytest

from styleusage.exceptions import MissingPropertyError, NotFoundError, StoreError
from styleusage.node import Node
from styleusage.query import NodeFilter
from styleusage.store import LocalFileStore

TREE = {
    "a": {
        "title": "A",
        "b": {"x": "1", "c": {"x": "2"}},
        "d": {"x": "3"},
    },
}


class TestLocalFileStore:
    """Tests for path lookup and child listing."""

    def test_get_node(self) -> None:
        """get_node returns the node's properties without its children."""
        node = LocalFileStore(TREE).get_node("/a")
        assert node.path == "/a"
        assert node.properties == {"title": "A"}

    def test_get_root(self) -> None:
        """The repository root resolves to the whole tree."""
        node = LocalFileStore(TREE).get_node("/")
        assert node.path == "/"
        assert node.properties == {}

    def test_get_missing_node(self) -> None:
        """Missing paths raise NotFoundError naming the path."""
        with pytest.raises(NotFoundError) as exc_info:
            LocalFileStore(TREE).get_node("/a/missing")
        assert exc_info.value.path == "/a/missing"

    def test_property_is_not_a_node(self) -> None:
        """A path ending at a property is not a node."""
        with pytest.raises(NotFoundError):
            LocalFileStore(TREE).get_node("/a/title")

    def test_children_in_document_order(self) -> None:
        """Children are listed in the order of the export."""
        store = LocalFileStore(TREE)
        children = list(store.children(store.get_node("/a")))
        assert [c.path for c in children] == ["/a/b", "/a/d"]
        assert children[0].properties == {"x": "1"}

    def test_has_child(self) -> None:
        """has_child only sees direct child nodes."""
        store = LocalFileStore(TREE)
        node = store.get_node("/a")
        assert store.has_child(node, "b")
        assert not store.has_child(node, "c")
        assert not store.has_child(node, "title")

    def test_get_property(self) -> None:
        """get_property returns the scalar value or raises MissingPropertyError."""
        store = LocalFileStore(TREE)
        node = store.get_node("/a")
        assert store.get_property(node, "title") == "A"
        with pytest.raises(MissingPropertyError) as exc_info:
            store.get_property(node, "jcr:title")
        assert exc_info.value.path == "/a"
        assert exc_info.value.property_name == "jcr:title"

    def test_empty_multi_value_is_missing_for_scalar_read(self) -> None:
        """An empty multi-valued property cannot satisfy a scalar read."""
        store = LocalFileStore({"n": {"tags": []}})
        node = store.get_node("/n")
        assert store.get_property_values(node, "tags") == []
        with pytest.raises(MissingPropertyError):
            store.get_property(node, "tags")


class TestLocalQuery:
    """Tests for in-memory query evaluation."""

    def test_query_descendants_pre_order(self) -> None:
        """Matches come back depth-first, pre-order."""
        store = LocalFileStore(TREE)
        result = list(store.query(NodeFilter("x"), "/a"))
        assert [n.path for n in result] == ["/a/b", "/a/b/c", "/a/d"]

    def test_query_excludes_scope_node(self) -> None:
        """The scope node itself is never returned."""
        store = LocalFileStore(TREE)
        result = list(store.query(NodeFilter("x"), "/a/b"))
        assert [n.path for n in result] == ["/a/b/c"]

    def test_query_with_value(self) -> None:
        """Value filters keep equal nodes only."""
        store = LocalFileStore(TREE)
        result = list(store.query(NodeFilter("x", "3"), "/"))
        assert result == [Node("/a/d")]

    def test_query_missing_scope(self) -> None:
        """Querying under a missing path raises NotFoundError."""
        with pytest.raises(NotFoundError):
            list(LocalFileStore(TREE).query(NodeFilter("x"), "/nope"))


class TestFromFile:
    """Tests for loading exports from disk."""

    def test_from_golden_file(self, golden_store: LocalFileStore) -> None:
        """The golden export loads and resolves nested paths."""
        node = golden_store.get_node("/content/site/jcr:content")
        assert node.properties["jcr:title"] == "Home"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a StoreError."""
        with pytest.raises(StoreError):
            LocalFileStore.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Invalid JSON is a StoreError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(StoreError):
            LocalFileStore.from_file(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        """The export must be a JSON object."""
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(StoreError):
            LocalFileStore.from_file(path)
