"""Join catalog styles with their usage counts and render the report."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from loguru import logger

from styleusage.catalog import CatalogEntry, CatalogSchema, CatalogWalker
from styleusage.scanner import STYLE_IDS_PROPERTY, UsageCounter, UsageScanner
from styleusage.store import ContentStore


@dataclass(frozen=True)
class StyleUsageRecord:
    """One report row: a defined style and how many nodes use it."""

    component_name: str
    policy_name: str
    style_group: str
    style_id: str
    style_name: str
    css_classes: str
    count: int

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.policy_name, self.style_group, self.style_id)

    @classmethod
    def from_entry(cls, entry: CatalogEntry, counter: UsageCounter) -> StyleUsageRecord:
        return cls(
            component_name=entry.component_name,
            policy_name=entry.policy_name,
            style_group=entry.style_group_label,
            style_id=entry.style_id,
            style_name=entry.style_label,
            css_classes=entry.css_classes,
            count=counter.count(entry.style_id),
        )


class CsvFormatter:
    """Render report rows as quoted CSV lines.

    Field order is component, policy, group, style name, style id,
    classes, count. Values are wrapped in double quotes as-is; embedded
    quotes are not escaped.
    """

    def format(self, record: StyleUsageRecord) -> str:
        fields = (
            record.component_name,
            record.policy_name,
            record.style_group,
            record.style_name,
            record.style_id,
            record.css_classes,
            str(record.count),
        )
        return ",".join(f'"{value}"' for value in fields)

    def write(self, records: Iterable[StyleUsageRecord], sink: TextIO) -> int:
        """Write one line per record to ``sink`` and return the line count."""
        written = 0
        for record in records:
            sink.write(self.format(record) + "\n")
            written += 1
        return written


class ReportBuilder:
    """Build the policy style usage report from a content store."""

    def __init__(
        self,
        store: ContentStore,
        schema: CatalogSchema | None = None,
        reference_property: str = STYLE_IDS_PROPERTY,
    ) -> None:
        """Initialize the builder.

        Args:
            store: Store holding both the content tree and the catalog.
            schema: Catalog property names; AEM defaults when omitted.
            reference_property: Property listing the style ids a node uses.
        """
        self._scanner = UsageScanner(store, reference_property)
        self._walker = CatalogWalker(store, schema)

    def build(self, content_root: str, catalog_root: str) -> list[StyleUsageRecord]:
        """Scan usage under ``content_root`` and join it with the catalog.

        Rows follow catalog order. Style ids used in content but not defined
        in the catalog do not appear in the report. Nothing is returned
        unless the whole report could be built.

        Args:
            content_root: Root of the tree scanned for style references.
            catalog_root: Root of the policy catalog.

        Returns:
            One record per style defined in the catalog.
        """
        # 1. Count references
        counter = self._scanner.scan(content_root)

        # 2. Walk the catalog, joining each style with its count
        records: list[StyleUsageRecord] = []
        defined: set[str] = set()
        for entry in self._walker.walk(catalog_root):
            records.append(StyleUsageRecord.from_entry(entry, counter))
            defined.add(entry.style_id)

        orphans = counter.style_ids() - defined
        if orphans:
            logger.debug("{} referenced style ids are not defined in the catalog", len(orphans))

        logger.info("Report built: {} styles", len(records))
        return records
