"""
Injury scrape pipeline.

Runs the extraction strategies in order over a parsed injuries page:

1. Table strategy: locate tables, classify headers, attribute teams, fold rows.
2. Heading strategy: team headings followed by a table, positional columns.
3. Last resort: every table row, positional columns, placeholder team.

Later strategies only run when the earlier ones found nothing. The combined
result is deduplicated.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from hockey_pool.config import settings
from hockey_pool.scraping.dedupe import dedupe_injuries
from hockey_pool.scraping.document import DocumentNode, parse_document
from hockey_pool.scraping.headers import classify_table_headers
from hockey_pool.scraping.locator import locate_tables
from hockey_pool.scraping.rows import (
    CELL_SELECTOR,
    TeamContext,
    fold_rows,
    positional_record,
    select_cells,
    select_rows,
)
from hockey_pool.scraping.teams import (
    TEAM_HEADING_SELECTOR,
    has_injury_context,
    is_plausible_team_name,
    resolve_table_team,
    team_from_previous_sibling,
)
from shared.models import InjuryRecord, ScrapeResult

logger = logging.getLogger(__name__)

UNKNOWN_TEAM = "Unknown Team"


def _process_table(
    table: DocumentNode,
    context: TeamContext,
    base_url: str,
) -> Tuple[List[InjuryRecord], TeamContext]:
    mapping = classify_table_headers(table)

    table_team = resolve_table_team(table)
    if table_team:
        context = context.switch(table_team)

    if not mapping and not has_injury_context(table):
        # Not an injury table, but its preceding element may name the team for the next one
        previous_team = team_from_previous_sibling(table)
        if previous_team:
            context = context.switch(previous_team)
        return [], context

    return fold_rows(select_rows(table), mapping, context, base_url)


def extract_from_tables(document: DocumentNode, base_url: str) -> List[InjuryRecord]:
    """Table strategy; the team context carries over from one table to the next."""
    tables = locate_tables(document)
    logger.info(f"Found {len(tables)} candidate injury tables")

    injuries: List[InjuryRecord] = []
    context = TeamContext()
    for table in tables:
        try:
            table_injuries, context = _process_table(table, context, base_url)
        except Exception as e:
            logger.warning(f"Skipping injury table that could not be processed: {e}")
            continue
        injuries.extend(table_injuries)

    return injuries


def _next_table(heading: DocumentNode) -> Optional[DocumentNode]:
    for sibling in heading.next_siblings():
        if sibling.matches("table"):
            return sibling
    return None


def extract_from_headings(document: DocumentNode, base_url: str) -> List[InjuryRecord]:
    """Heading strategy for pages where team names sit in headings above plain tables."""
    injuries: List[InjuryRecord] = []

    for heading in document.select(TEAM_HEADING_SELECTOR):
        team = heading.text()
        if not is_plausible_team_name(team, allow_double_space=False, allow_newline=False):
            continue

        table = _next_table(heading)
        if table is None:
            continue

        for row in table.select("tbody tr, tr"):
            record = positional_record(row.select(CELL_SELECTOR), team, base_url, min_name_length=3)
            if record is not None:
                injuries.append(record)

    return injuries


def extract_unattributed(document: DocumentNode, base_url: str) -> List[InjuryRecord]:
    """Last resort: positional rows from every table, labelled with a placeholder team."""
    injuries: List[InjuryRecord] = []
    for table in locate_tables(document, include_containers=False):
        for row in select_rows(table):
            record = positional_record(select_cells(row), UNKNOWN_TEAM, base_url)
            if record is not None:
                injuries.append(record)
    return injuries


def extract_injuries(html: str, base_url: Optional[str] = None) -> List[InjuryRecord]:
    """
    Extract deduplicated injury records from the injuries page HTML.

    Args:
        html: Raw page HTML
        base_url: Site root used to resolve relative player links

    Returns:
        List[InjuryRecord]: Unique injuries in page order (may be empty)
    """
    base_url = base_url or settings.ESPN_BASE_URL
    document = parse_document(html)

    strategies = [
        ("tables", extract_from_tables),
        ("headings", extract_from_headings),
        ("placeholder team", extract_unattributed),
    ]

    injuries: List[InjuryRecord] = []
    for strategy_name, strategy in strategies:
        injuries = strategy(document, base_url)
        if injuries:
            logger.info(f"Extracted {len(injuries)} injuries using the {strategy_name} strategy")
            break
        logger.debug(f"No injuries found with the {strategy_name} strategy")

    unique_injuries = dedupe_injuries(injuries)
    logger.info(f"Scraped {len(injuries)} injuries, {len(unique_injuries)} unique after deduplication")
    if not unique_injuries:
        logger.warning("No injuries found. This might indicate the page structure has changed.")

    return unique_injuries


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix, e.g. 2025-11-03T12:00:00.000Z."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_scrape_result(injuries: List[InjuryRecord], scraped_at: Optional[datetime] = None) -> ScrapeResult:
    """Wrap extracted injuries in a timestamped ScrapeResult."""
    return ScrapeResult(
        scraped_at=utc_timestamp(scraped_at),
        count=len(injuries),
        items=tuple(injuries),
    )
