"""
Leaderboard: a bounded ranking of players by absolute XP.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..config import config
from .user_profile import UserProfile, absolute_xp


@dataclass
class LeaderboardEntry:
    """
    One ranked player.

    Attributes:
        name: Player display name (unique on the board)
        xp: Absolute XP (cross-level)
        level: Level at the time of the update
        recorded_at: When the entry was written
        entry_id: Unique identifier (auto-generated)
    """
    name: str
    xp: int
    level: int
    recorded_at: datetime
    entry_id: str = field(default_factory=lambda: f"lb-{uuid.uuid4()}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence."""
        return {
            "entry_id": self.entry_id,
            "name": self.name,
            "xp": self.xp,
            "level": self.level,
            "recorded_at": self.recorded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LeaderboardEntry:
        return cls(
            entry_id=data["entry_id"],
            name=data["name"],
            xp=int(data["xp"]),
            level=int(data["level"]),
            recorded_at=datetime.fromisoformat(data["recorded_at"]),
        )


def entry_for_profile(profile: UserProfile, now: datetime) -> LeaderboardEntry:
    """Build the board entry for a profile using its absolute XP."""
    return LeaderboardEntry(
        name=profile.name,
        xp=absolute_xp(profile),
        level=profile.level,
        recorded_at=now,
    )


def upsert(
    board: Sequence[LeaderboardEntry],
    entry: LeaderboardEntry,
    limit: Optional[int] = None,
) -> List[LeaderboardEntry]:
    """
    Insert or replace a player's entry and re-rank.

    Any previous entry with the same name is dropped, the new entry is
    appended, the board is stably sorted by descending XP and truncated.
    Among equal XP the earlier entries keep their places and the new entry
    sorts after them.

    Returns:
        A new list; the input board is not modified
    """
    limit = limit if limit is not None else config.progression.leaderboard_size
    updated = [existing for existing in board if existing.name != entry.name]
    updated.append(entry)
    updated.sort(key=lambda e: e.xp, reverse=True)
    return updated[:limit]


def rank_of(board: Sequence[LeaderboardEntry], name: str) -> Optional[int]:
    """1-based rank of ``name`` on the board, or None if absent."""
    for position, entry in enumerate(board, start=1):
        if entry.name == name:
            return position
    return None
