"""
Table locator - finds the elements that may hold injury rows.
"""

import logging
from typing import List

from hockey_pool.scraping.document import DocumentNode

logger = logging.getLogger(__name__)

# ESPN class names first; the first selector with any match is used on its own
TABLE_SELECTORS = [
    'table[class*="Table"]',
    'table[class*="injuries"]',
    'table[class*="Injuries"]',
    ".Table",
    ".Table__TBODY",
]
CONTAINER_SELECTOR = '[class*="injuries"], [class*="Injuries"], [data-testid*="injuries"]'


def locate_tables(document: DocumentNode, include_containers: bool = True) -> List[DocumentNode]:
    """
    Candidate table-like elements in document order.

    Tries the prioritized selectors, then every ``table``, then (optionally)
    div-based injury containers.
    """
    for selector in TABLE_SELECTORS:
        tables = document.select(selector)
        if tables:
            logger.debug(f"Located {len(tables)} tables with selector '{selector}'")
            return tables

    tables = document.select("table")
    if tables:
        logger.debug(f"Located {len(tables)} plain tables")
        return tables

    if include_containers:
        containers = document.select(CONTAINER_SELECTOR)
        if containers:
            logger.info(f"Found {len(containers)} div-based injury containers, processing...")
        return containers

    return []
