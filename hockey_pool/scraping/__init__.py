"""
Initialize scraping package.
"""

from .dedupe import dedupe_injuries, injury_key
from .document import DocumentNode, SoupNode, parse_document
from .headers import EXPECTED_HEADERS, classify_table_headers
from .scraper import UNKNOWN_TEAM, build_scrape_result, extract_injuries

__all__ = [
    "DocumentNode",
    "SoupNode",
    "parse_document",
    "EXPECTED_HEADERS",
    "classify_table_headers",
    "dedupe_injuries",
    "injury_key",
    "UNKNOWN_TEAM",
    "build_scrape_result",
    "extract_injuries"
]
