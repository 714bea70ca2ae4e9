"""
Header classification for injury tables.

Maps a table's column headers to the semantic injury fields using a loose,
order-independent substring match.
"""

from typing import Dict, List

from hockey_pool.scraping.document import DocumentNode

NAME = "NAME"
POS = "POS"
EST_RETURN = "EST. RETURN"
DATE = "DATE"
STATUS = "STATUS"
COMMENT = "COMMENT"

# Expected column headers to identify injury tables
EXPECTED_HEADERS = [NAME, POS, EST_RETURN, DATE, STATUS, COMMENT]

# Sources tried in order; the first one yielding any non-empty header text wins
HEADER_SELECTORS = [
    "thead tr th",
    "thead tr td",
    "tbody tr:first-child th",
    "tbody tr:first-child td",
    "tr:first-child th",
    "tr:first-child td",
    ".Table__TH",
    '[class*="Table__TH"]',
]

HeaderMapping = Dict[str, int]


def normalize_header(header: str) -> str:
    """Normalize header text for comparison (case-insensitive, trim whitespace)."""
    return header.strip().upper()


def header_keyword_count(text: str) -> int:
    """Number of expected header keywords contained in the text."""
    upper = text.upper()
    return sum(1 for keyword in EXPECTED_HEADERS if keyword in upper)


def _header_matches(expected: str, header: str) -> bool:
    # Empty headers would match everything through the reverse containment check
    return bool(header) and (expected in header or header in expected)


def collect_headers(table: DocumentNode) -> List[str]:
    """
    Collect raw header texts for a table, one entry per column.

    Empty cells keep their position so indices line up with data cells.
    """
    for selector in HEADER_SELECTORS:
        headers = [cell.text() for cell in table.select(selector)]
        if any(headers):
            return headers
    return []


def has_expected_headers(headers: List[str]) -> bool:
    """Check if every expected injury header matches one of the given headers."""
    normalized = [normalize_header(h) for h in headers]
    return all(
        any(_header_matches(expected, actual) for actual in normalized)
        for expected in EXPECTED_HEADERS
    )


def map_headers_to_indices(headers: List[str]) -> HeaderMapping:
    """Map each expected field to the first matching column index; unmatched fields are left out."""
    mapping: HeaderMapping = {}
    normalized = [normalize_header(h) for h in headers]

    for expected in EXPECTED_HEADERS:
        for index, actual in enumerate(normalized):
            if _header_matches(expected, actual):
                mapping[expected] = index
                break

    return mapping


def classify_table_headers(table: DocumentNode) -> HeaderMapping:
    """
    Build the header mapping for a table.

    Returns an empty mapping when the table is not recognised as an injury table,
    in which case rows fall back to positional extraction.
    """
    headers = collect_headers(table)
    if headers and has_expected_headers(headers):
        return map_headers_to_indices(headers)
    return {}
