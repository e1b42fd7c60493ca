"""Entry point for style-usage.

Usage:
    python -m styleusage

Builds the policy style usage report and prints it to stdout as CSV.
Roots and store location come from STYLE_USAGE_* environment variables
(see styleusage.config).
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from styleusage.config import Settings, get_settings
from styleusage.exceptions import StyleUsageError
from styleusage.logging import configure_logging
from styleusage.report import CsvFormatter, ReportBuilder
from styleusage.store import ContentStore, LocalFileStore, SlingContentStore


def create_store(settings: Settings) -> ContentStore:
    """Create the store the settings point at."""
    if settings.store_file is not None:
        logger.info("Reading store export {}", settings.store_file)
        return LocalFileStore.from_file(settings.store_file)
    logger.info("Connecting to {}", settings.store_url)
    return SlingContentStore(
        settings.store_url,
        username=settings.store_username,
        password=settings.store_password,
        timeout=settings.timeout,
    )


def run(settings: Settings, out: TextIO) -> int:
    """Build the report and write it to ``out``.

    Returns:
        Number of rows written.
    """
    with create_store(settings) as store:
        records = ReportBuilder(store).build(settings.content_root, settings.catalog_root)
    return CsvFormatter().write(records, out)


def main() -> int:
    """Main entry point."""
    try:
        settings = get_settings()
    except StyleUsageError as e:
        configure_logging()
        logger.error("Error: {}", e)
        return 1

    configure_logging(settings.log_level, settings.json_logs)
    try:
        run(settings, sys.stdout)
    except StyleUsageError as e:
        logger.error("Error: {}", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Aborted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
