"""Immutable view of a single content-store node."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any

PRIMARY_TYPE = "jcr:primaryType"
PATH_PROPERTY = "jcr:path"
DEFAULT_NODE_TYPE = "nt:unstructured"


def as_text(value: Any) -> str:
    """Render a stored property value the way the repository prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def split_members(data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """Split a JSON node export into (properties, children).

    Object-valued members are child nodes; everything else is a property.
    """
    properties: dict[str, Any] = {}
    children: dict[str, dict[str, Any]] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            children[key] = value
        else:
            properties[key] = value
    return properties, children


def child_path(parent: str, name: str) -> str:
    if parent == "/":
        return f"/{name}"
    return f"{parent}/{name}"


@dataclass(frozen=True)
class Node:
    """A node in the content store: its absolute path and its properties."""

    path: str
    properties: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def parent_path(self) -> str:
        return posixpath.dirname(self.path) or "/"

    @property
    def parent_name(self) -> str:
        return posixpath.basename(self.parent_path)

    @property
    def node_type(self) -> str:
        # Nodes created without an explicit type default to nt:unstructured
        return as_text(self.properties.get(PRIMARY_TYPE, DEFAULT_NODE_TYPE))

    def values(self, name: str) -> list[str] | None:
        """Return a property's values as strings, or None if it is absent.

        Single-valued properties come back as a one-element list.
        """
        if name not in self.properties:
            return None
        raw = self.properties[name]
        if isinstance(raw, (list, tuple)):
            return [as_text(v) for v in raw]
        return [as_text(raw)]
