"""
Row extraction for injury tables.

Rows are folded left to right with a ``TeamContext`` accumulator: each step
returns the record produced by the row (if any) together with the team
context for the next row, so team-name rows can switch attribution mid-table.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urljoin

from hockey_pool.scraping.document import DocumentNode
from hockey_pool.scraping.headers import (
    COMMENT,
    DATE,
    EST_RETURN,
    EXPECTED_HEADERS,
    NAME,
    POS,
    STATUS,
    HeaderMapping,
    header_keyword_count,
)
from hockey_pool.scraping.teams import MAX_TEAM_NAME_LENGTH, MIN_TEAM_NAME_LENGTH
from shared.models import InjuryRecord

logger = logging.getLogger(__name__)

ROW_SELECTORS = ["tbody tr", "tr", ".Table__TR", '[class*="Table__TR"]']
CELL_SELECTOR = 'td, th, .Table__TD, [class*="Table__TD"]'

# NHL position codes as printed by ESPN: C, LW, RW, D, G
POSITION_CODE_RE = re.compile(r"^[CDGLRW]{1,2}$", re.IGNORECASE)
NUMERIC_RE = re.compile(r"^\d+$")

MIN_BANNER_NAME_LENGTH = 6
MAX_POSITION_LENGTH = 3

ROW_INJURY = "injury"
ROW_TEAM = "team"
ROW_HEADER = "header"
ROW_SKIPPED = "skipped"
ROW_UNATTRIBUTED = "unattributed"


@dataclass(frozen=True)
class TeamContext:
    """Team currently attributed to rows; empty until a heuristic establishes one."""

    team: str = ""

    def switch(self, team: str) -> "TeamContext":
        return TeamContext(team=team)


@dataclass(frozen=True)
class RowOutcome:
    kind: str
    context: TeamContext
    record: Optional[InjuryRecord] = None


def select_rows(table: DocumentNode) -> List[DocumentNode]:
    """Rows from the first selector that finds any."""
    for selector in ROW_SELECTORS:
        rows = table.select(selector)
        if rows:
            return rows
    return []


def select_cells(row: DocumentNode) -> List[DocumentNode]:
    cells = row.select(CELL_SELECTOR)
    if not cells:
        cells = row.children()
    return cells


def resolve_player_url(cell: DocumentNode, base_url: str) -> Optional[str]:
    """Absolute URL of the first link in the cell, resolving relative links against the site."""
    link = cell.select_one("a[href]")
    if link is None:
        return None
    href = (link.attr("href") or "").strip()
    if not href:
        return None
    if href.startswith("http"):
        return href
    return urljoin(base_url.rstrip("/") + "/", href)


def is_header_row(first_cell_text: str) -> bool:
    return header_keyword_count(first_cell_text) >= 2


def is_position_code(text: str) -> bool:
    return bool(POSITION_CODE_RE.match(text))


def is_team_banner_row(cell_texts: Sequence[str]) -> bool:
    """
    Team-name row detected before any field extraction.

    Either the row has a single cell, or only its first cell carries text and
    that text has a plausible team-name length without being a position code.
    """
    if len(cell_texts) == 1:
        return True
    first = cell_texts[0]
    if not first or any(cell_texts[1:]):
        return False
    return (
        MIN_BANNER_NAME_LENGTH <= len(first) <= MAX_TEAM_NAME_LENGTH
        and not is_position_code(first)
        and not NUMERIC_RE.match(first)
    )


def banner_team_name(text: str) -> Optional[str]:
    """Team name carried by a banner row, or None when the text is unusable."""
    if not text or NUMERIC_RE.match(text):
        return None
    if not MIN_TEAM_NAME_LENGTH <= len(text) <= MAX_TEAM_NAME_LENGTH:
        return None
    return text


def is_valid_name(name: str) -> bool:
    return len(name) > 1 and header_keyword_count(name) == 0


def is_valid_position(position: str) -> bool:
    return 1 <= len(position) <= MAX_POSITION_LENGTH


def looks_like_team_row(name: str, position: str, cell_count: int) -> bool:
    """Secondary team-vs-injury decision used when no team is known yet."""
    if header_keyword_count(name) >= 2:
        return False
    if cell_count == 1:
        return True
    return not is_position_code(position) and MIN_BANNER_NAME_LENGTH <= len(name) <= MAX_TEAM_NAME_LENGTH


def resolve_indices(mapping: HeaderMapping, cell_count: int) -> Optional[HeaderMapping]:
    """
    Field indices for a row.

    Uses the header mapping when it covers NAME and POS, otherwise assumes the
    standard column order (name, pos, est. return, date, status, comment) for
    rows with at least two cells. Returns None when the row cannot be mapped.
    """
    if NAME in mapping and POS in mapping:
        return mapping
    if cell_count < 2:
        return None
    return {field: index for index, field in enumerate(EXPECTED_HEADERS) if index < cell_count}


def _text_at(cell_texts: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(cell_texts):
        return ""
    return cell_texts[index]


def extract_fields(
    cells: Sequence[DocumentNode],
    cell_texts: Sequence[str],
    indices: HeaderMapping,
    team: str,
    base_url: str,
) -> InjuryRecord:
    name_index = indices.get(NAME)
    player_url = None
    if name_index is not None and name_index < len(cells):
        player_url = resolve_player_url(cells[name_index], base_url)

    return InjuryRecord(
        team=team,
        name=_text_at(cell_texts, name_index),
        position=_text_at(cell_texts, indices.get(POS)),
        est_return=_text_at(cell_texts, indices.get(EST_RETURN)),
        date=_text_at(cell_texts, indices.get(DATE)),
        status=_text_at(cell_texts, indices.get(STATUS)),
        comment=_text_at(cell_texts, indices.get(COMMENT)),
        player_url=player_url,
    )


def classify_row(
    row: DocumentNode,
    mapping: HeaderMapping,
    context: TeamContext,
    base_url: str,
) -> RowOutcome:
    """
    Classify one row and produce its record.

    Precedence: header row, then team banner row, then field validation (an
    invalid position with a name-like first cell becomes a team row), then the
    no-team-yet check.
    """
    cells = select_cells(row)
    if not cells:
        return RowOutcome(ROW_SKIPPED, context)

    cell_texts = [cell.text() for cell in cells]
    first_text = cell_texts[0]

    if is_header_row(first_text):
        return RowOutcome(ROW_HEADER, context)

    if is_team_banner_row(cell_texts):
        team = banner_team_name(first_text)
        return RowOutcome(ROW_TEAM, context.switch(team) if team else context)

    indices = resolve_indices(mapping, len(cells))
    if indices is None:
        return RowOutcome(ROW_SKIPPED, context)

    record = extract_fields(cells, cell_texts, indices, context.team, base_url)
    name, position = record.name, record.position

    if not (is_valid_name(name) and is_valid_position(position)):
        if len(name) > 3 and not is_valid_position(position) and header_keyword_count(name) == 0:
            return RowOutcome(ROW_TEAM, context.switch(name))
        return RowOutcome(ROW_SKIPPED, context)

    if not context.team:
        if looks_like_team_row(name, position, len(cells)):
            return RowOutcome(ROW_TEAM, context.switch(name))
        return RowOutcome(ROW_UNATTRIBUTED, context)

    return RowOutcome(ROW_INJURY, context, record)


def fold_rows(
    rows: Sequence[DocumentNode],
    mapping: HeaderMapping,
    context: TeamContext,
    base_url: str,
) -> Tuple[List[InjuryRecord], TeamContext]:
    """
    Walk a table's rows in order, threading the team context through each step.

    A row that fails to parse is logged and skipped; it never aborts the table.
    """
    records: List[InjuryRecord] = []
    for row in rows:
        try:
            outcome = classify_row(row, mapping, context, base_url)
        except Exception as e:
            logger.debug(f"Skipping unparseable injury row: {e}")
            continue

        if outcome.kind == ROW_TEAM and outcome.context.team != context.team:
            logger.debug(f"Team row switched attribution to '{outcome.context.team}'")
        elif outcome.kind == ROW_UNATTRIBUTED:
            logger.debug("Dropping injury row with no team attribution")

        context = outcome.context
        if outcome.record is not None:
            records.append(outcome.record)

    return records, context


def positional_record(
    cells: Sequence[DocumentNode],
    team: str,
    base_url: str,
    min_name_length: int = 2,
) -> Optional[InjuryRecord]:
    """
    Record built from the standard column order, used by the fallback strategies.

    Returns None unless the row has two cells, a name of at least
    ``min_name_length`` characters without header keywords, and a valid position.
    """
    if len(cells) < 2:
        return None
    cell_texts = [cell.text() for cell in cells]
    indices = resolve_indices({}, len(cells))
    record = extract_fields(cells, cell_texts, indices, team, base_url)
    if len(record.name) < min_name_length or not is_valid_name(record.name):
        return None
    if not is_valid_position(record.position):
        return None
    return record
