"""Count style references across a content tree."""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger

from styleusage.store import ContentStore

STYLE_IDS_PROPERTY = "cq:styleIds"


class UsageCounter:
    """Per-style-id usage counts gathered by one scan.

    Only observed ids are stored; ``count`` returns 0 for everything else.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self.nodes_scanned = 0

    def increment(self, style_id: str) -> None:
        self._counts[style_id] = self._counts.get(style_id, 0) + 1

    def count(self, style_id: str) -> int:
        return self._counts.get(style_id, 0)

    def style_ids(self) -> set[str]:
        return set(self._counts)

    def items(self) -> Iterator[tuple[str, int]]:
        return iter(self._counts.items())

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"UsageCounter({self._counts!r}, nodes_scanned={self.nodes_scanned})"


class UsageScanner:
    """Walk every node under a root and count its style references."""

    def __init__(self, store: ContentStore, reference_property: str = STYLE_IDS_PROPERTY) -> None:
        self._store = store
        self._reference_property = reference_property

    def scan(self, root_path: str) -> UsageCounter:
        """Scan the tree rooted at ``root_path``.

        Nodes are visited depth-first, pre-order, the root included. Every
        value of the reference property counts once, so a node listing the
        same id twice contributes two. Nodes without the property are
        skipped.

        Raises:
            NotFoundError: If ``root_path`` does not exist.
            StoreError: If any read fails.
        """
        counter = UsageCounter()
        root = self._store.get_node(root_path)
        logger.info("Scanning {} for {}", root_path, self._reference_property)

        stack = [iter([root])]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue
            counter.nodes_scanned += 1
            if self._store.has_property(node, self._reference_property):
                for style_id in self._store.get_property_values(node, self._reference_property):
                    counter.increment(style_id)
            stack.append(self._store.children(node))

        logger.info(
            "Scanned {} nodes, {} distinct style ids referenced",
            counter.nodes_scanned,
            len(counter),
        )
        return counter
