"""Content store access for the style usage report.

Defines the ContentStore interface the report depends on and its
implementations:
- SlingContentStore: Production store reading a Sling/AEM repository over HTTP
- LocalFileStore: Store backed by a JSON tree export (tests, offline runs)
"""

from __future__ import annotations

import json
import ssl
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import certifi
import httpx
from loguru import logger

from styleusage.exceptions import (
    APIError,
    AuthenticationError,
    MissingPropertyError,
    MultiValuedPropertyError,
    NotFoundError,
    StoreError,
)
from styleusage.node import PATH_PROPERTY, Node, child_path, split_members

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType

    from styleusage.query import NodeFilter

DEFAULT_TIMEOUT = 60
QUERYBUILDER_PATH = "/bin/querybuilder.json"


class ContentStore(ABC):
    """Abstract hierarchical node store.

    Implementations provide path lookup, child listing and a scoped
    declarative query. Property access is shared and works on the
    properties carried by each Node.
    """

    @abstractmethod
    def get_node(self, path: str) -> Node:
        """Fetch a node by absolute path.

        Args:
            path: Absolute repository path, e.g. ``/content/site``.

        Returns:
            The node with its properties.

        Raises:
            NotFoundError: If nothing exists at ``path``.
        """
        pass

    @abstractmethod
    def children(self, node: Node) -> Iterator[Node]:
        """Yield the direct children of ``node`` in store order."""
        pass

    @abstractmethod
    def query(self, node_filter: NodeFilter, scope_path: str) -> Iterator[Node]:
        """Yield descendants of ``scope_path`` matching ``node_filter``.

        The node at ``scope_path`` itself is never part of the result.
        """
        pass

    def close(self) -> None:
        """Release any open connections."""

    def has_property(self, node: Node, name: str) -> bool:
        return name in node.properties

    def get_property_values(self, node: Node, name: str) -> list[str]:
        """Read a single- or multi-valued property as a list of strings.

        Raises:
            MissingPropertyError: If the node does not carry the property.
        """
        values = node.values(name)
        if values is None:
            raise MissingPropertyError(node.path, name)
        return values

    def get_property(self, node: Node, name: str) -> str:
        """Read a scalar property.

        Raises:
            MissingPropertyError: If the property is absent or has no value.
            MultiValuedPropertyError: If the property holds several values.
        """
        values = self.get_property_values(node, name)
        if not values:
            raise MissingPropertyError(node.path, name)
        if len(values) > 1:
            raise MultiValuedPropertyError(node.path, name, len(values))
        return values[0]

    def has_child(self, node: Node, name: str) -> bool:
        return any(child.name == name for child in self.children(node))

    def __enter__(self) -> ContentStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# --- Sling store ---


class SlingContentStore(ContentStore):
    """Production store using the Sling GET servlet and QueryBuilder.

    Node reads go to ``<path>.json``, child listings to ``<path>.1.json``
    (object-valued members are the children) and queries to
    ``/bin/querybuilder.json`` with full hits.
    """

    def __init__(
        self,
        base_url: str,
        username: str = "",
        password: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Repository base URL, e.g. ``http://localhost:4502``.
            username: Basic auth user; no auth is sent when empty.
            password: Basic auth password.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._base_url = base_url.rstrip("/")
        auth = httpx.BasicAuth(username, password) if username else None
        self._client = httpx.Client(
            base_url=self._base_url,
            auth=auth,
            timeout=timeout,
            verify=ssl.create_default_context(cafile=certifi.where()),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def get_node(self, path: str) -> Node:
        """GET <path>.json"""
        data = self._get(f"{_quote_path(path)}.json", path)
        properties, _ = split_members(data)
        return Node(path, properties)

    def children(self, node: Node) -> Iterator[Node]:
        """GET <path>.1.json"""
        data = self._get(f"{_quote_path(node.path)}.1.json", node.path)
        _, members = split_members(data)
        for name, child in members.items():
            properties, _ = split_members(child)
            yield Node(child_path(node.path, name), properties)

    def has_child(self, node: Node, name: str) -> bool:
        try:
            path = child_path(node.path, name)
            self._get(f"{_quote_path(path)}.json", path)
        except NotFoundError:
            return False
        return True

    def query(self, node_filter: NodeFilter, scope_path: str) -> Iterator[Node]:
        """GET /bin/querybuilder.json"""
        logger.debug("Query: {}", node_filter.to_sql2(scope_path))
        data = self._get(
            QUERYBUILDER_PATH, scope_path, params=node_filter.to_querybuilder(scope_path)
        )
        if data.get("success") is False:
            raise StoreError(f"Query failed under {scope_path}: {node_filter}")
        for hit in data.get("hits", []):
            properties, _ = split_members(hit)
            path = properties.pop(PATH_PROPERTY, None)
            if not path:
                raise StoreError(f"Query hit without {PATH_PROPERTY} under {scope_path}")
            yield Node(str(path), properties)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    # --- HTTP helpers ---

    def _get(
        self, url: str, path: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise StoreError(f"Network error reading {path}: {e}") from e
        self._check_response(response, path)
        try:
            data = response.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON returned for {path}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Unexpected response shape for {path}")
        return data

    def _check_response(self, response: httpx.Response, path: str) -> None:
        """Check HTTP response and raise appropriate exceptions.

        Raises:
            AuthenticationError: On 401/403 responses.
            NotFoundError: On 404 responses.
            APIError: On other error responses.
        """
        if response.is_success:
            return

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Access denied reading {path} ({response.status_code}). "
                "Check the store username and password."
            )

        if response.status_code == 404:
            raise NotFoundError(path)

        raise APIError(response.status_code, f"{path}: {response.text[:200]}")


def _quote_path(path: str) -> str:
    return quote(path, safe="/:")


# --- Local file store ---


class LocalFileStore(ContentStore):
    """Store backed by an in-memory JSON tree.

    The tree has the shape of a Sling ``.infinity.json`` export taken at
    the repository root: object-valued members are child nodes, all other
    members are properties.
    """

    def __init__(self, tree: dict[str, Any]) -> None:
        """Initialize the store.

        Args:
            tree: JSON object representing the node at ``/``.
        """
        self._tree = tree

    @classmethod
    def from_file(cls, path: Path) -> LocalFileStore:
        """Load a store from a JSON export file."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StoreError(f"Cannot read store file {path}: {e}") from e
        except ValueError as e:
            raise StoreError(f"Invalid JSON in store file {path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store file {path} must contain a JSON object")
        return cls(data)

    def get_node(self, path: str) -> Node:
        properties, _ = split_members(self._resolve(path))
        return Node(path, properties)

    def children(self, node: Node) -> Iterator[Node]:
        _, members = split_members(self._resolve(node.path))
        for name, child in members.items():
            properties, _ = split_members(child)
            yield Node(child_path(node.path, name), properties)

    def query(self, node_filter: NodeFilter, scope_path: str) -> Iterator[Node]:
        logger.debug("Query: {}", node_filter.to_sql2(scope_path))
        # Pre-order walk of the scope's descendants in document order
        stack = [self.children(Node(scope_path))]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            if node_filter.matches(child):
                yield child
            stack.append(self.children(child))

    def _resolve(self, path: str) -> dict[str, Any]:
        if not path.startswith("/"):
            raise NotFoundError(path, f"Not an absolute path: {path}")
        current = self._tree
        for segment in path.strip("/").split("/"):
            if not segment:
                continue
            member = current.get(segment)
            if not isinstance(member, dict):
                raise NotFoundError(path)
            current = member
        return current
