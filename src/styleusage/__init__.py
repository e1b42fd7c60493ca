"""style-usage: count how content uses the styles defined in component policies.

Scans a content tree for style references, walks the
policy -> style group -> style catalog and reports one row per defined
style with its usage count.
"""

__version__ = "0.1.0"

from styleusage.catalog import CatalogEntry, CatalogSchema, CatalogWalker
from styleusage.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    MissingPropertyError,
    MultiValuedPropertyError,
    NotFoundError,
    StoreError,
    StyleUsageError,
)
from styleusage.node import Node
from styleusage.query import NodeFilter
from styleusage.report import CsvFormatter, ReportBuilder, StyleUsageRecord
from styleusage.scanner import UsageCounter, UsageScanner
from styleusage.store import ContentStore, LocalFileStore, SlingContentStore

__all__ = [
    # Report
    "ReportBuilder",
    "StyleUsageRecord",
    "CsvFormatter",
    # Scanning and catalog
    "UsageScanner",
    "UsageCounter",
    "CatalogWalker",
    "CatalogEntry",
    "CatalogSchema",
    # Store
    "ContentStore",
    "SlingContentStore",
    "LocalFileStore",
    "Node",
    "NodeFilter",
    # Exceptions
    "StyleUsageError",
    "StoreError",
    "NotFoundError",
    "AuthenticationError",
    "APIError",
    "MissingPropertyError",
    "MultiValuedPropertyError",
    "ConfigurationError",
    "__version__",
]
