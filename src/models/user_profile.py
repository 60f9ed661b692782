"""
Player profile: identity, experience, level, streak and unlocked badges.

The profile is plain data. Progression rules live in ``src.utils.progress``
and mutate the profile they are handed; persistence is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set

from ..config import config

AVATARS = (
    "🤖", "🧠", "🚀", "🦊", "🐱", "🦄", "🐼", "🦁",
    "🐸", "🌟", "⚡️", "🎮",
)

DEFAULT_NAME = "Explorer"
# Must match maxLength of "name" in schemas/user_profile.schema.json
MAX_NAME_LENGTH = 64


@dataclass
class Badge:
    """
    An unlocked achievement.

    Attributes:
        badge_id: Stable identifier (matches a BadgeDefinition id)
        name: Display title
        icon: Icon reference for the rendering layer
        description: What the player did to earn it
        is_unlocked: Unlock flag
        unlocked_at: When the badge was unlocked
    """
    badge_id: str
    name: str
    icon: str
    description: str
    is_unlocked: bool = False
    unlocked_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "badge_id": self.badge_id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "is_unlocked": self.is_unlocked,
            "unlocked_at": self.unlocked_at.isoformat() if self.unlocked_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Badge:
        unlocked_at = data.get("unlocked_at")
        return cls(
            badge_id=data["badge_id"],
            name=data["name"],
            icon=data["icon"],
            description=data["description"],
            is_unlocked=bool(data.get("is_unlocked", False)),
            unlocked_at=datetime.fromisoformat(unlocked_at) if unlocked_at else None,
        )


@dataclass
class UserProfile:
    """
    Player profile.

    ``xp`` is the experience accumulated within the current level only;
    see ``absolute_xp`` in ``src.utils.progress`` for the cross-level total.
    """
    name: str = DEFAULT_NAME
    avatar_index: int = 0
    xp: int = 0
    level: int = 1
    streak: int = 0
    last_active: Optional[date] = None
    badges: List[Badge] = field(default_factory=list)
    completed_modules: Set[str] = field(default_factory=set)

    @property
    def xp_for_next_level(self) -> int:
        return self.level * config.progression.xp_per_level

    @property
    def level_progress(self) -> float:
        """Fraction of the way to the next level (0.0 - 1.0)."""
        needed = self.xp_for_next_level
        return (self.xp % needed) / needed

    @property
    def unlocked_badge_ids(self) -> Set[str]:
        return {badge.badge_id for badge in self.badges}

    @property
    def avatar(self) -> str:
        return AVATARS[self.avatar_index % len(AVATARS)]

    # ==================== Persistence ====================

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary for persistence."""
        return {
            "name": self.name,
            "avatar_index": self.avatar_index,
            "xp": self.xp,
            "level": self.level,
            "streak": self.streak,
            "last_active": self.last_active.isoformat() if self.last_active else None,
            "badges": [badge.to_dict() for badge in self.badges],
            "completed_modules": sorted(self.completed_modules),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UserProfile:
        """Rebuild a profile from its persisted form."""
        last_active = data.get("last_active")
        return cls(
            name=data.get("name", DEFAULT_NAME),
            avatar_index=int(data.get("avatar_index", 0)),
            xp=int(data.get("xp", 0)),
            level=int(data.get("level", 1)),
            streak=int(data.get("streak", 0)),
            last_active=date.fromisoformat(last_active) if last_active else None,
            badges=[Badge.from_dict(b) for b in data.get("badges", [])],
            completed_modules=set(data.get("completed_modules", [])),
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"UserProfile(name='{self.name}', level={self.level}, "
            f"xp={self.xp}/{self.xp_for_next_level}, streak={self.streak}, "
            f"badges={len(self.badges)})"
        )


def absolute_xp(profile: UserProfile) -> int:
    """
    Total experience across all levels.

    Used for badges and leaderboard ranking so players at different levels
    compare fairly.
    """
    return profile.xp + (profile.level - 1) * config.progression.xp_per_level
