"""Declarative node filters evaluated by a ContentStore.

A filter selects descendants of a scope path whose node type matches and
whose property either equals a value or simply exists. The same filter
renders to Sling QueryBuilder parameters, to the equivalent JCR-SQL2
statement, and can be evaluated in memory against a Node.
"""

from __future__ import annotations

from dataclasses import dataclass

from styleusage.node import DEFAULT_NODE_TYPE, Node

POLICY_RESOURCE_TYPE = "wcm/core/components/policy/policy"


@dataclass(frozen=True)
class NodeFilter:
    """Match nodes of ``node_type`` by one property.

    When ``value`` is None the property only has to be present.

    ``matches`` compares the node type exactly. The repository's own query
    engines (a JCR-SQL2 selector, the QueryBuilder ``type`` predicate) also
    accept subtypes of ``node_type``, so LocalFileStore can return fewer
    nodes than SlingContentStore when the tree uses derived types.
    """

    property_name: str
    value: str | None = None
    node_type: str = DEFAULT_NODE_TYPE

    def matches(self, node: Node) -> bool:
        if node.node_type != self.node_type:
            return False
        values = node.values(self.property_name)
        if values is None:
            return False
        if self.value is None:
            return True
        return self.value in values

    def to_querybuilder(self, scope_path: str) -> dict[str, str]:
        """QueryBuilder parameters returning every matching hit with its properties."""
        params = {
            "path": scope_path,
            "type": self.node_type,
            "property": self.property_name,
            "p.limit": "-1",
            "p.hits": "full",
            "p.nodedepth": "0",
        }
        if self.value is None:
            params["property.operation"] = "exists"
        else:
            params["property.value"] = self.value
        return params

    def to_sql2(self, scope_path: str) -> str:
        if self.value is None:
            condition = f"[{self.property_name}] IS NOT NULL"
        else:
            condition = f"[{self.property_name}] = '{self.value}'"
        return (
            f"SELECT * FROM [{self.node_type}] AS t "
            f"WHERE ISDESCENDANTNODE(t, [{scope_path}]) AND {condition}"
        )

    def __str__(self) -> str:
        if self.value is None:
            return f"[{self.node_type}] with {self.property_name}"
        return f"[{self.node_type}] with {self.property_name}={self.value}"
