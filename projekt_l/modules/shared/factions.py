"""
Faction catalog.

The six fixed life domains every user levels up, with the display metadata
the dashboard radar needs. `FACTION_ORDER` is the radar order, clockwise from
the top.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Optional, Tuple


class FactionId(str, Enum):
    BODY = "body"
    MIND = "mind"
    SOCIAL = "social"
    FINANCE = "finance"
    CAREER = "career"
    KNOWLEDGE = "knowledge"

    @classmethod
    def parse(cls, value: "FactionId | str") -> "FactionId":
        """
        Coerce a faction id string into a FactionId.

        Raises:
            NotFoundError: If the id names no faction
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            from .exceptions import NotFoundError

            raise NotFoundError("Faction", value) from None


@dataclass(frozen=True)
class FactionInfo:
    faction_id: FactionId
    name: str
    icon: str
    color: str


FACTIONS: Final[Dict[FactionId, FactionInfo]] = {
    FactionId.CAREER: FactionInfo(FactionId.CAREER, "Career", "💼", "#3B82F6"),
    FactionId.BODY: FactionInfo(FactionId.BODY, "Body", "💪", "#10B981"),
    FactionId.MIND: FactionInfo(FactionId.MIND, "Mind", "🧠", "#F59E0B"),
    FactionId.FINANCE: FactionInfo(FactionId.FINANCE, "Finance", "💰", "#14B8A6"),
    FactionId.SOCIAL: FactionInfo(FactionId.SOCIAL, "Social", "👥", "#EC4899"),
    FactionId.KNOWLEDGE: FactionInfo(FactionId.KNOWLEDGE, "Knowledge", "📚", "#6366F1"),
}

FACTION_ORDER: Final[Tuple[FactionId, ...]] = (
    FactionId.CAREER,
    FactionId.BODY,
    FactionId.MIND,
    FactionId.FINANCE,
    FactionId.SOCIAL,
    FactionId.KNOWLEDGE,
)


def get_faction_info(faction_id: "FactionId | str") -> Optional[FactionInfo]:
    """Display metadata for a faction, or None for an unknown id."""
    from .exceptions import NotFoundError

    try:
        return FACTIONS[FactionId.parse(faction_id)]
    except NotFoundError:
        return None
