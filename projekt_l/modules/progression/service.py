"""
Progression Service
===================

Purpose
-------
Apply XP awards to a user's Character and build the dashboard view of their
progression. This is the entry point for the habit, quest and achievement
handlers of the host application: they load a Character, call
`apply_event()`, persist `character.to_records()` and publish the drained
domain events.

Domain
------
- Skill awards (propagated to the owning faction and the character)
- Direct faction awards
- Dashboard snapshot: character header, faction radar, balance bonus

Design Notes
------------
- No persistence: the caller owns the read-modify-write around storage and
  its atomicity.
- Every award runs inside a LogContext so all records carry the user,
  target and correlation id.
- Awards that cross more than LEVEL_UP_ALERT_THRESHOLD levels at once are
  logged as warnings; such jumps usually mean a mis-scaled XP source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from projekt_l.core.logging import LogContext
from projekt_l.modules.progression.models import ProgressionTarget
from projekt_l.modules.progression.stats import build_faction_radar, format_xp
from projekt_l.modules.shared.base_service import BaseService
from projekt_l.modules.shared.exceptions import (
    InvalidOperationError,
    ProjektLDomainException,
    ValidationError,
)
from projekt_l.modules.shared.validators import validate_identifier, validate_xp_amount

if TYPE_CHECKING:
    from logging import Logger

    from projekt_l.domain.models import Character, XpAwardResult, XpGainEvent


class ProgressionService(BaseService):
    """
    Service applying XP awards and summarizing progression.

    Public Methods
    --------------
    - apply_event() -> Apply one XpGainEvent to a Character
    - apply_events() -> Apply several events in order
    - dashboard_snapshot() -> Character header, radar and balance bonus
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        super().__init__(logger)

    # ========================================================================
    # PUBLIC API - Write Operations
    # ========================================================================

    def apply_event(self, character: Character, event: XpGainEvent) -> XpAwardResult:
        """
        Apply one XP award to a character.

        Args:
            character: Aggregate to update in place
            event: The award; SKILL or FACTION target

        Returns:
            XpAwardResult describing skill, faction and character changes

        Raises:
            ValidationError: If the event is malformed
            InvalidOperationError: If the event targets the character directly
            NotFoundError: If a faction id is unknown

        Example:
            >>> result = service.apply_event(
            ...     character,
            ...     XpGainEvent(amount=250, target=ProgressionTarget.SKILL,
            ...                 target_id="running", source="habit"),
            ... )
            >>> result.skill_leveled_up
            True
        """
        self._validate_event(event)

        with LogContext(
            user_id=character.id,
            entity_id=f"{event.target.value}:{event.target_id}",
            component="progression",
            operation="apply_event",
        ):
            try:
                if event.target is ProgressionTarget.SKILL:
                    result = character.award_skill_xp(
                        event.target_id,
                        event.amount,
                        faction_id=event.faction_override,
                    )
                else:
                    result = character.award_faction_xp(event.target_id, event.amount)
            except ProjektLDomainException as e:
                self.log_error("apply_event", e, xp_source=event.source)
                raise

            self.log_operation(
                "apply_event",
                xp_source=event.source,
                amount=event.amount,
                faction_id=result.faction_id.value if result.faction_id else None,
                character_level=result.character_level_after,
            )
            self._log_level_ups(result)

        return result

    def apply_events(self, character: Character, events: List[XpGainEvent]) -> List[XpAwardResult]:
        """Apply events in order; stops at the first invalid one."""
        return [self.apply_event(character, event) for event in events]

    # ========================================================================
    # PUBLIC API - Read Operations
    # ========================================================================

    def dashboard_snapshot(self, character: Character) -> Dict[str, Any]:
        """
        Summarize a character for the dashboard.

        Returns:
            Dict with the character header (level, tier, XP, progress), the
            faction radar in display order, faction totals, the average
            faction level and balance bonus state, and skills sorted by level.
        """
        factions = character.factions
        faction_total_xp = sum(record.total_xp for record in factions.values())
        tier = character.tier

        skills = sorted(
            character.skills.values(),
            key=lambda skill: (-skill.level, -skill.current_xp, skill.skill_id),
        )

        return {
            "user_id": character.id,
            "level": character.level,
            "tier": {"name": tier.name, "color": tier.color},
            "total_xp": character.total_xp,
            "total_xp_display": format_xp(character.total_xp),
            "progress_percent": round(character.progress_percent, 1),
            "xp_to_next_level": character.xp_to_next_level,
            "factions": build_faction_radar(factions.values()),
            "faction_total_xp": faction_total_xp,
            "faction_total_xp_display": format_xp(faction_total_xp),
            "average_faction_level": character.average_faction_level,
            "balance_bonus": character.has_balance_bonus,
            "skills": [
                {
                    **skill.to_dict(),
                    "progress_percent": round(skill.progress_percent, 1),
                    "xp_to_next_level": skill.xp_to_next_level,
                }
                for skill in skills
            ],
        }

    # ========================================================================
    # INTERNAL HELPERS
    # ========================================================================

    def _validate_event(self, event: XpGainEvent) -> None:
        if not isinstance(event.target, ProgressionTarget):
            raise ValidationError("target", f"unknown progression target {event.target!r}")
        if event.target is ProgressionTarget.CHARACTER:
            raise InvalidOperationError(
                "apply_event",
                "character XP is only earned through skill and faction awards",
            )
        validate_xp_amount(event.amount)
        validate_identifier(event.target_id, "target_id")
        validate_identifier(event.source, "source")

    def _log_level_ups(self, result: XpAwardResult) -> None:
        if result.skill_leveled_up and result.skill_result is not None:
            self.log.info(
                f"Skill {result.target_id} reached level {result.skill_result.new_level}",
                extra={"levels_gained": result.skill_result.levels_gained},
            )
        if result.faction_leveled_up and result.faction_id is not None:
            self.log.info(
                f"Faction {result.faction_id.value} reached level {result.faction_level_after}",
                extra={"old_level": result.faction_level_before},
            )
        if result.character_leveled_up:
            self.log.info(
                f"Character reached level {result.character_level_after}",
                extra={"old_level": result.character_level_before},
            )

        threshold = self.get_config("LEVEL_UP_ALERT_THRESHOLD", default=10)
        if result.levels_gained > threshold:
            self.log.warning(
                f"Single award crossed {result.levels_gained} levels",
                extra={
                    "levels_gained": result.levels_gained,
                    "alert_threshold": threshold,
                    "amount": result.amount,
                },
            )
