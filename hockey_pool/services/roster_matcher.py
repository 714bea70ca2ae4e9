"""
Match scraped injury names against the pool roster dataset.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from shared.models import PoolData

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_player_name(name: str) -> List[str]:
    """
    Get all comparable forms of a player name.

    "Last, First" also yields "first last"; "First Last" also yields
    "last, first" (last word is the last name). All forms are lowercased.
    """
    trimmed = name.strip()
    normalized = trimmed.lower()

    if "," in trimmed:
        parts = [p.strip() for p in trimmed.split(",") if p.strip()]
        if len(parts) == 2:
            return [normalized, f"{parts[1]} {parts[0]}".lower()]

    space_parts = _WHITESPACE_RE.split(trimmed) if trimmed else []
    if len(space_parts) >= 2:
        last_first = f"{space_parts[-1]}, {' '.join(space_parts[:-1])}".lower()
        return [normalized, last_first]

    return [normalized]


def names_match(a: str, b: str) -> bool:
    """True when any normalized form of one name equals a form of the other."""
    variants = set(normalize_player_name(a))
    return any(variant in variants for variant in normalize_player_name(b))


class RosterMatcher:
    """Owner lookup over a pool roster dataset."""

    def __init__(self, pool_data: PoolData):
        self.pool_data = pool_data
        self._team_index_by_variant: Dict[str, int] = {}
        for index, team in enumerate(pool_data.teams):
            for player in team.players:
                for variant in normalize_player_name(player.name):
                    # First team listing a name keeps it
                    self._team_index_by_variant.setdefault(variant, index)

    @property
    def owners(self) -> List[str]:
        return [team.owner for team in self.pool_data.teams]

    def has_owner(self, owner: str) -> bool:
        return any(team.owner == owner for team in self.pool_data.teams)

    def find_owner_for_player(self, player_name: str) -> Optional[str]:
        """Owner of the pool team rostering this player, or None."""
        indices = [
            self._team_index_by_variant[variant]
            for variant in normalize_player_name(player_name)
            if variant in self._team_index_by_variant
        ]
        if not indices:
            return None
        return self.pool_data.teams[min(indices)].owner

    def injuries_for_owner(self, items: Iterable[Dict[str, Any]], owner: str) -> List[Dict[str, Any]]:
        """Injury payload items whose player belongs to the owner's pool team."""
        return [item for item in items if self.find_owner_for_player(item.get("name", "")) == owner]

    def owner_injury_counts(self, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Injury counts for owners with at least one injured player, sorted by owner name."""
        counts: Dict[str, int] = {}
        for item in items:
            owner = self.find_owner_for_player(item.get("name", ""))
            if owner:
                counts[owner] = counts.get(owner, 0) + 1
        return [
            {"owner": owner, "count": counts[owner]}
            for owner in sorted(counts, key=str.casefold)
        ]


def load_pool_data(path: str) -> PoolData:
    """
    Load the roster dataset exported by the spreadsheet ingestion.

    Raises:
        FileNotFoundError: The file does not exist
        ValueError: The file is not valid roster JSON
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid roster JSON in {path}: {e}") from e

    pool_data = PoolData.model_validate(data)
    player_count = sum(len(team.players) for team in pool_data.teams)
    logger.info(f"Loaded roster dataset: {len(pool_data.teams)} teams, {player_count} players")
    return pool_data
