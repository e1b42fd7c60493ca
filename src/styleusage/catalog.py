"""Walk the policy -> style group -> style catalog."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from loguru import logger

from styleusage.node import Node
from styleusage.query import POLICY_RESOURCE_TYPE, NodeFilter
from styleusage.store import ContentStore


@dataclass(frozen=True)
class CatalogSchema:
    """Property and node names that describe the style catalog."""

    policy_marker: str = "sling:resourceType"
    policy_resource_type: str = POLICY_RESOURCE_TYPE
    policy_title: str = "jcr:title"
    style_groups_node: str = "cq:styleGroups"
    style_group_label: str = "cq:styleGroupLabel"
    style_id: str = "cq:styleId"
    style_label: str = "cq:styleLabel"
    style_classes: str = "cq:styleClasses"

    @property
    def policies(self) -> NodeFilter:
        return NodeFilter(self.policy_marker, self.policy_resource_type)

    @property
    def style_groups(self) -> NodeFilter:
        return NodeFilter(self.style_group_label)

    @property
    def styles(self) -> NodeFilter:
        return NodeFilter(self.style_id)


@dataclass(frozen=True)
class CatalogEntry:
    """One style definition, flattened with its policy and group."""

    component_name: str
    policy_name: str
    style_group_label: str
    style_id: str
    style_label: str
    css_classes: str


class CatalogWalker:
    """Enumerate every style defined under a catalog root.

    Three levels are queried one after another: policies under the root,
    style groups under each policy, styles under each group. Policies
    without a style groups child contribute nothing.
    """

    def __init__(self, store: ContentStore, schema: CatalogSchema | None = None) -> None:
        self._store = store
        self._schema = schema or CatalogSchema()

    def walk(self, catalog_root: str) -> Iterator[CatalogEntry]:
        """Yield catalog entries in policy, group, style order.

        Raises:
            NotFoundError: If ``catalog_root`` does not exist.
            MissingPropertyError: If a policy, group or style lacks a
                mandatory property.
            StoreError: If any query fails.
        """
        self._store.get_node(catalog_root)
        logger.info("Walking style catalog under {}", catalog_root)

        for policy in self._store.query(self._schema.policies, catalog_root):
            if not self._store.has_child(policy, self._schema.style_groups_node):
                logger.debug("Skipping {}: no {}", policy.path, self._schema.style_groups_node)
                continue
            yield from self._walk_policy(policy)

    def _walk_policy(self, policy: Node) -> Iterator[CatalogEntry]:
        component_name = policy.parent_name
        policy_name = self._store.get_property(policy, self._schema.policy_title)

        for group in self._store.query(self._schema.style_groups, policy.path):
            group_label = self._store.get_property(group, self._schema.style_group_label)

            for style in self._store.query(self._schema.styles, group.path):
                yield CatalogEntry(
                    component_name=component_name,
                    policy_name=policy_name,
                    style_group_label=group_label,
                    style_id=self._store.get_property(style, self._schema.style_id),
                    style_label=self._store.get_property(style, self._schema.style_label),
                    css_classes=self._store.get_property(style, self._schema.style_classes),
                )
