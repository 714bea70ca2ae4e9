"""
Deduplication of scraped injury records.

The source has no IDs, so identity is a normalized tuple of the visible fields.
"""

import logging
import re
from typing import Dict, Iterable, List

from shared.models import InjuryRecord

logger = logging.getLogger(__name__)

COMMENT_KEY_LENGTH = 50
KEY_DELIMITER = "\x1f"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key_part(value: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return _WHITESPACE_RE.sub(" ", (value or "").strip().lower())


def injury_key(injury: InjuryRecord) -> str:
    """Identity key: team, name, position, date, status and the first 50 chars of the comment."""
    return KEY_DELIMITER.join([
        normalize_key_part(injury.team),
        normalize_key_part(injury.name),
        normalize_key_part(injury.position),
        normalize_key_part(injury.date),
        normalize_key_part(injury.status),
        normalize_key_part(injury.comment)[:COMMENT_KEY_LENGTH],
    ])


def dedupe_injuries(injuries: Iterable[InjuryRecord]) -> List[InjuryRecord]:
    """Keep the first record seen for each identity key, preserving order."""
    unique: Dict[str, InjuryRecord] = {}
    for injury in injuries:
        key = injury_key(injury)
        if key in unique:
            logger.debug(f"Duplicate injury found: {injury.name} ({injury.team})")
            continue
        unique[key] = injury
    return list(unique.values())
