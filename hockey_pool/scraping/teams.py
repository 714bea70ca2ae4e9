"""
Team attribution heuristics.

ESPN groups injuries by NHL team but the team name can live in a sibling
heading, in a wrapping section, in the table caption, or in a row of the
table itself. These helpers find the initial team for a table; row-level
overrides are handled by the row extractor.
"""

from typing import Optional

from hockey_pool.scraping.document import DocumentNode
from hockey_pool.scraping.headers import header_keyword_count

TEAM_HEADING_SELECTOR = 'h2, h3, h4, h5, [class*="team"], [class*="Team"]'
TEAM_CONTAINER_SELECTOR = '[class*="team"], [class*="Team"], [class*="injuries"], [class*="Injuries"]'
CONTAINER_HEADING_SELECTOR = 'h2, h3, h4, [class*="team"], .Table__Title'
INJURY_CONTEXT_SELECTOR = '[class*="injuries"], [class*="Injuries"], h2, h3'

MIN_TEAM_NAME_LENGTH = 3
MAX_TEAM_NAME_LENGTH = 40


def is_plausible_team_name(text: str, allow_double_space: bool = True, allow_newline: bool = True) -> bool:
    """
    Check whether text could be a team name rather than column headers or boilerplate.

    Rejects text with 2+ header keywords or outside the 3-40 character window.
    """
    if not text:
        return False
    if header_keyword_count(text) >= 2:
        return False
    if not MIN_TEAM_NAME_LENGTH <= len(text) <= MAX_TEAM_NAME_LENGTH:
        return False
    if not allow_double_space and "  " in text:
        return False
    if not allow_newline and "\n" in text:
        return False
    return True


def team_from_preceding_heading(table: DocumentNode) -> Optional[str]:
    """Nearest preceding sibling heading, if its text looks like a team name."""
    for sibling in table.previous_siblings():
        if sibling.matches(TEAM_HEADING_SELECTOR):
            text = sibling.text()
            return text if is_plausible_team_name(text, allow_double_space=False) else None
    return None


def team_from_own_heading(handle: DocumentNode) -> Optional[str]:
    """Heading inside a div-based injury container; tables never qualify."""
    if handle.matches("table"):
        return None
    heading = handle.select_one(CONTAINER_HEADING_SELECTOR)
    if heading is None:
        return None
    text = heading.text()
    return text if is_plausible_team_name(text) else None


def team_from_ancestor(table: DocumentNode) -> Optional[str]:
    """Heading inside the nearest team/injury grouping container."""
    container = table.closest(TEAM_CONTAINER_SELECTOR)
    if container is None:
        return None
    heading = container.select_one(CONTAINER_HEADING_SELECTOR)
    if heading is None:
        return None
    text = heading.text()
    return text if is_plausible_team_name(text) else None


def team_from_caption(table: DocumentNode) -> Optional[str]:
    caption = table.select_one("caption")
    if caption is None:
        return None
    text = caption.text()
    return text if is_plausible_team_name(text) else None


def resolve_table_team(table: DocumentNode) -> Optional[str]:
    """
    Determine the team for a table before its rows are walked.

    Returns None when no heuristic succeeds; callers then keep the running team
    from earlier tables, since a single heading can precede a group of tables.
    """
    return (
        team_from_own_heading(table)
        or team_from_preceding_heading(table)
        or team_from_ancestor(table)
        or team_from_caption(table)
    )


def has_injury_context(table: DocumentNode) -> bool:
    """True when the table's parent holds injury-related markup or section headings."""
    parent = table.parent()
    return parent is not None and bool(parent.select(INJURY_CONTEXT_SELECTOR))


def team_from_previous_sibling(table: DocumentNode) -> Optional[str]:
    """Text of the immediately preceding element, used for tables that are not walked."""
    previous = next(table.previous_siblings(), None)
    if previous is None:
        return None
    text = previous.text()
    return text if is_plausible_team_name(text) else None
