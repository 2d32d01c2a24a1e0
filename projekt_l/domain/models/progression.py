"""
Progression domain models.

Purpose
-------
Rich models for one user's progression state:

- FactionProgress: cumulative XP in one of the six life domains
- SkillProgress: a skill's level and the XP remainder inside that level
- Character: aggregate root owning all of the above plus lifetime XP

Business Rules
--------------
- Faction level is always derived from total XP, never stored.
- Skill XP is resolved incrementally on the power-law curve; the remainder
  always stays below the next level's cost.
- Skill XP is also credited to the owning faction (an explicit override
  wins over the skill's own faction) and to the character's lifetime total.
- XP totals never go below zero; skill levels never go down.

Domain Events
-------------
- skill.assigned: A skill record was created at level 1
- skill.xp_gained: Every skill award, including penalties
- skill.leveled_up: Skill crossed one or more levels
- faction.xp_gained: Every faction award
- faction.leveled_up: Faction level increased
- character.leveled_up: Overall level increased
- character.balance_bonus_unlocked / character.balance_bonus_lost:
  Balance bonus eligibility flipped
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from projekt_l.modules.progression.models import (
    PowerLawProgression,
    ProgressionTarget,
)
from projekt_l.modules.progression.resolver import XpApplicationResult, add_xp
from projekt_l.modules.progression.stats import (
    LevelTier,
    average_faction_level,
    get_level_tier,
    has_balance_bonus,
)
from projekt_l.modules.shared.constants import MIN_LEVEL
from projekt_l.modules.shared.factions import FactionId
from projekt_l.modules.shared.formulas import (
    calculate_faction_level,
    faction_level_progress,
    progress_to_next_level,
    total_xp_for_level,
    xp_for_level,
    xp_to_next_faction_level,
)

from .base import (
    AggregateRoot,
    DomainEvent,
    DomainValidationError,
    ValueObject,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
)

_CHARACTER_MODEL = PowerLawProgression()


# ============================================================================
# VALUE OBJECTS
# ============================================================================


@dataclass(frozen=True)
class FactionProgress(ValueObject):
    """
    Cumulative XP in one faction.

    Attributes
    ----------
    faction_id : FactionId
        One of the six factions
    total_xp : int
        Lifetime faction XP (never negative)
    weekly_xp : int
        XP earned in the current weekly window
    monthly_xp : int
        XP earned in the current monthly window
    """

    faction_id: FactionId
    total_xp: int = 0
    weekly_xp: int = 0
    monthly_xp: int = 0

    def _validate(self) -> None:
        try:
            object.__setattr__(self, "faction_id", FactionId(self.faction_id))
        except ValueError:
            raise DomainValidationError(
                f"unknown faction {self.faction_id!r}", field="faction_id"
            ) from None
        validate_non_negative(self.total_xp, "total_xp")

    @property
    def level(self) -> int:
        return calculate_faction_level(self.total_xp)

    @property
    def progress_percent(self) -> int:
        return faction_level_progress(self.total_xp)

    @property
    def xp_to_next_level(self) -> int:
        return xp_to_next_faction_level(self.total_xp)

    def gain(self, amount: int) -> FactionProgress:
        """
        Return a new FactionProgress with `amount` XP added.

        The total is floored at 0; the rolling windows record the raw amount.
        """
        amount = int(amount)
        return replace(
            self,
            total_xp=max(0, self.total_xp + amount),
            weekly_xp=self.weekly_xp + amount,
            monthly_xp=self.monthly_xp + amount,
        )

    def reset_weekly(self) -> FactionProgress:
        return replace(self, weekly_xp=0)

    def reset_monthly(self) -> FactionProgress:
        return replace(self, monthly_xp=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "faction_id": self.faction_id.value,
            "total_xp": self.total_xp,
            "weekly_xp": self.weekly_xp,
            "monthly_xp": self.monthly_xp,
            "level": self.level,
        }


@dataclass(frozen=True)
class SkillProgress(ValueObject):
    """
    A skill's level and the XP carried inside that level.

    Attributes
    ----------
    skill_id : str
        Skill identifier
    level : int
        Current level (>= 1)
    current_xp : int
        Remainder in [0, xp_for_level(level + 1))
    faction_id : Optional[FactionId]
        Faction that receives this skill's XP, if any
    """

    skill_id: str
    level: int = MIN_LEVEL
    current_xp: int = 0
    faction_id: Optional[FactionId] = None

    def _validate(self) -> None:
        validate_not_empty(self.skill_id, "skill_id")
        validate_positive(self.level, "level")
        validate_non_negative(self.current_xp, "current_xp")
        if self.current_xp >= xp_for_level(self.level + 1):
            raise DomainValidationError(
                f"current_xp {self.current_xp} must stay below "
                f"{xp_for_level(self.level + 1)} at level {self.level}",
                field="current_xp",
            )
        if self.faction_id is not None:
            try:
                object.__setattr__(self, "faction_id", FactionId(self.faction_id))
            except ValueError:
                raise DomainValidationError(
                    f"unknown faction {self.faction_id!r}", field="faction_id"
                ) from None

    @property
    def progress_percent(self) -> float:
        return progress_to_next_level(self.level, self.current_xp)

    @property
    def xp_to_next_level(self) -> int:
        return xp_for_level(self.level + 1) - self.current_xp

    @property
    def lifetime_xp(self) -> int:
        """XP needed to reach this state from level 1 with 0 XP."""
        return total_xp_for_level(self.level) - xp_for_level(MIN_LEVEL) + self.current_xp

    def apply_xp(self, amount: int) -> Tuple[SkillProgress, XpApplicationResult]:
        result = add_xp(self.level, self.current_xp, amount)
        updated = replace(self, level=result.new_level, current_xp=result.new_xp)
        return updated, result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skill_id": self.skill_id,
            "level": self.level,
            "current_xp": self.current_xp,
            "faction_id": self.faction_id.value if self.faction_id else None,
        }


@dataclass(frozen=True)
class XpGainEvent:
    """
    One XP award aimed at a skill or a faction.

    Transient input to the progression service; `amount` may be negative
    for penalties.
    """

    amount: int
    target: ProgressionTarget
    target_id: str
    source: str = "manual"
    faction_override: Optional[FactionId] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> XpGainEvent:
        override = data.get("faction_override")
        return cls(
            amount=data["amount"],
            target=ProgressionTarget.from_string(str(data["target"])),
            target_id=data["target_id"],
            source=data.get("source", "manual"),
            faction_override=FactionId.parse(override) if override else None,
        )


@dataclass(frozen=True)
class XpAwardResult:
    """Outcome of one award applied to a Character."""

    target: ProgressionTarget
    target_id: str
    amount: int
    faction_id: Optional[FactionId]
    skill: Optional[SkillProgress]
    skill_result: Optional[XpApplicationResult]
    faction_level_before: Optional[int]
    faction_level_after: Optional[int]
    character_level_before: int
    character_level_after: int
    balance_bonus: bool
    events: Tuple[DomainEvent, ...] = field(default_factory=tuple)

    @property
    def skill_leveled_up(self) -> bool:
        return bool(self.skill_result and self.skill_result.leveled_up)

    @property
    def faction_leveled_up(self) -> bool:
        if self.faction_level_before is None or self.faction_level_after is None:
            return False
        return self.faction_level_after > self.faction_level_before

    @property
    def character_leveled_up(self) -> bool:
        return self.character_level_after > self.character_level_before

    @property
    def levels_gained(self) -> int:
        """Largest number of levels crossed by any progression in this award."""
        gains = [self.character_level_after - self.character_level_before]
        if self.skill_result is not None:
            gains.append(self.skill_result.levels_gained)
        if self.faction_level_before is not None and self.faction_level_after is not None:
            gains.append(self.faction_level_after - self.faction_level_before)
        return max(gains)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target.value,
            "target_id": self.target_id,
            "amount": self.amount,
            "faction_id": self.faction_id.value if self.faction_id else None,
            "skill": self.skill.to_dict() if self.skill else None,
            "skill_result": self.skill_result.to_dict() if self.skill_result else None,
            "faction_level_before": self.faction_level_before,
            "faction_level_after": self.faction_level_after,
            "faction_leveled_up": self.faction_leveled_up,
            "character_level_before": self.character_level_before,
            "character_level_after": self.character_level_after,
            "character_leveled_up": self.character_leveled_up,
            "balance_bonus": self.balance_bonus,
            "events": [event.event_name for event in self.events],
        }


# ============================================================================
# AGGREGATE ROOT
# ============================================================================


class Character(AggregateRoot):
    """
    One user's complete progression state.

    Holds exactly one FactionProgress per faction (missing ones start at
    0 XP), any number of SkillProgress records and the lifetime character XP
    on the power-law curve.
    """

    def __init__(
        self,
        user_id: str,
        factions: Optional[Iterable[FactionProgress]] = None,
        skills: Optional[Iterable[SkillProgress]] = None,
        total_xp: int = 0,
    ) -> None:
        validate_not_empty(user_id, "user_id")
        validate_non_negative(total_xp, "total_xp")
        super().__init__(user_id)

        self._factions: Dict[FactionId, FactionProgress] = {
            faction_id: FactionProgress(faction_id) for faction_id in FactionId
        }
        for record in factions or ():
            self._factions[record.faction_id] = record

        self._skills: Dict[str, SkillProgress] = {}
        for skill in skills or ():
            if skill.skill_id in self._skills:
                raise DomainValidationError(
                    f"duplicate skill {skill.skill_id!r}", field="skills"
                )
            self._skills[skill.skill_id] = skill

        self._total_xp = int(total_xp)

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def user_id(self) -> str:
        return self._id

    @property
    def total_xp(self) -> int:
        return self._total_xp

    @property
    def level(self) -> int:
        return _CHARACTER_MODEL.level_for_xp(self._total_xp)

    @property
    def progress_percent(self) -> float:
        return _CHARACTER_MODEL.progress_percent(self._total_xp)

    @property
    def xp_to_next_level(self) -> int:
        return _CHARACTER_MODEL.xp_to_next_level(self._total_xp)

    @property
    def tier(self) -> LevelTier:
        return get_level_tier(self.level)

    @property
    def factions(self) -> Dict[FactionId, FactionProgress]:
        return dict(self._factions)

    @property
    def skills(self) -> Dict[str, SkillProgress]:
        return dict(self._skills)

    @property
    def faction_levels(self) -> Dict[FactionId, int]:
        return {faction_id: record.level for faction_id, record in self._factions.items()}

    @property
    def has_balance_bonus(self) -> bool:
        return has_balance_bonus(self.faction_levels)

    @property
    def average_faction_level(self) -> int:
        return average_faction_level(self.faction_levels)

    def get_faction(self, faction_id: FactionId | str) -> FactionProgress:
        """
        Raises:
            NotFoundError: If faction_id names no faction
        """
        return self._factions[FactionId.parse(faction_id)]

    def get_skill(self, skill_id: str) -> Optional[SkillProgress]:
        return self._skills.get(skill_id)

    # ========================================================================
    # BUSINESS OPERATIONS
    # ========================================================================

    def assign_skill(self, skill_id: str, faction_id: Optional[FactionId | str] = None) -> SkillProgress:
        """
        Return the skill record, creating it at level 1 with 0 XP if unknown.

        A faction given for a skill that has none yet is attached to it.
        """
        faction = FactionId.parse(faction_id) if faction_id is not None else None
        skill = self._skills.get(skill_id)

        if skill is None:
            skill = SkillProgress(skill_id=skill_id, faction_id=faction)
            self._skills[skill_id] = skill
            self.add_domain_event(
                "skill.assigned",
                {
                    "user_id": self.id,
                    "skill_id": skill_id,
                    "faction_id": faction.value if faction else None,
                },
            )
        elif skill.faction_id is None and faction is not None:
            skill = replace(skill, faction_id=faction)
            self._skills[skill_id] = skill

        return skill

    def award_skill_xp(
        self,
        skill_id: str,
        amount: int,
        faction_id: Optional[FactionId | str] = None,
    ) -> XpAwardResult:
        """
        Award XP to a skill and propagate it to its faction and the character.

        Parameters
        ----------
        skill_id : str
            Skill to credit; created at level 1 if unknown
        amount : int
            XP to add (negative for penalties)
        faction_id : Optional[FactionId | str]
            Faction override; defaults to the skill's own faction

        Examples
        --------
        >>> result = character.award_skill_xp("running", 250, faction_id="body")
        >>> result.skill.level
        2
        """
        amount = int(amount)
        override = FactionId.parse(faction_id) if faction_id is not None else None
        events_before = len(self._domain_events)
        bonus_before = self.has_balance_bonus
        character_level_before = self.level

        skill = self.assign_skill(skill_id)
        updated_skill, skill_result = skill.apply_xp(amount)
        self._skills[skill_id] = updated_skill

        self.add_domain_event(
            "skill.xp_gained",
            {
                "user_id": self.id,
                "skill_id": skill_id,
                "amount": amount,
                "level": updated_skill.level,
                "current_xp": updated_skill.current_xp,
            },
        )
        if skill_result.leveled_up:
            self.add_domain_event(
                "skill.leveled_up",
                {
                    "user_id": self.id,
                    "skill_id": skill_id,
                    "old_level": skill.level,
                    "new_level": updated_skill.level,
                    "levels_gained": skill_result.levels_gained,
                },
            )

        target_faction = override or updated_skill.faction_id
        faction_before = faction_after = None
        if target_faction is not None:
            faction_before, faction_after = self._credit_faction(target_faction, amount)

        character_level_after = self._credit_character(amount, character_level_before)
        self._check_balance_bonus(bonus_before)

        return XpAwardResult(
            target=ProgressionTarget.SKILL,
            target_id=skill_id,
            amount=amount,
            faction_id=target_faction,
            skill=updated_skill,
            skill_result=skill_result,
            faction_level_before=faction_before,
            faction_level_after=faction_after,
            character_level_before=character_level_before,
            character_level_after=character_level_after,
            balance_bonus=self.has_balance_bonus,
            events=tuple(self._domain_events[events_before:]),
        )

    def award_faction_xp(self, faction_id: FactionId | str, amount: int) -> XpAwardResult:
        """
        Award XP directly to a faction (and the character's lifetime total).

        Raises:
            NotFoundError: If faction_id names no faction
        """
        amount = int(amount)
        faction = FactionId.parse(faction_id)
        events_before = len(self._domain_events)
        bonus_before = self.has_balance_bonus
        character_level_before = self.level

        faction_before, faction_after = self._credit_faction(faction, amount)
        character_level_after = self._credit_character(amount, character_level_before)
        self._check_balance_bonus(bonus_before)

        return XpAwardResult(
            target=ProgressionTarget.FACTION,
            target_id=faction.value,
            amount=amount,
            faction_id=faction,
            skill=None,
            skill_result=None,
            faction_level_before=faction_before,
            faction_level_after=faction_after,
            character_level_before=character_level_before,
            character_level_after=character_level_after,
            balance_bonus=self.has_balance_bonus,
            events=tuple(self._domain_events[events_before:]),
        )

    def reset_weekly(self) -> None:
        """Zero every faction's weekly window."""
        for faction_id, record in self._factions.items():
            self._factions[faction_id] = record.reset_weekly()

    def reset_monthly(self) -> None:
        for faction_id, record in self._factions.items():
            self._factions[faction_id] = record.reset_monthly()

    # ========================================================================
    # INTERNAL HELPERS
    # ========================================================================

    def _credit_faction(self, faction_id: FactionId, amount: int) -> Tuple[int, int]:
        record = self._factions[faction_id]
        updated = record.gain(amount)
        self._factions[faction_id] = updated

        self.add_domain_event(
            "faction.xp_gained",
            {
                "user_id": self.id,
                "faction_id": faction_id.value,
                "amount": amount,
                "total_xp": updated.total_xp,
            },
        )
        if updated.level > record.level:
            self.add_domain_event(
                "faction.leveled_up",
                {
                    "user_id": self.id,
                    "faction_id": faction_id.value,
                    "old_level": record.level,
                    "new_level": updated.level,
                },
            )
        return record.level, updated.level

    def _credit_character(self, amount: int, level_before: int) -> int:
        self._total_xp = max(0, self._total_xp + amount)
        level_after = self.level
        if level_after > level_before:
            self.add_domain_event(
                "character.leveled_up",
                {
                    "user_id": self.id,
                    "old_level": level_before,
                    "new_level": level_after,
                    "tier": get_level_tier(level_after).name,
                },
            )
        return level_after

    def _check_balance_bonus(self, had_bonus: bool) -> None:
        has_bonus = self.has_balance_bonus
        if has_bonus and not had_bonus:
            self.add_domain_event(
                "character.balance_bonus_unlocked",
                {"user_id": self.id, "faction_levels": self._faction_levels_payload()},
            )
        elif had_bonus and not has_bonus:
            self.add_domain_event(
                "character.balance_bonus_lost",
                {"user_id": self.id, "faction_levels": self._faction_levels_payload()},
            )

    def _faction_levels_payload(self) -> Dict[str, int]:
        return {faction_id.value: level for faction_id, level in self.faction_levels.items()}

    # ========================================================================
    # CONVERSION
    # ========================================================================

    @classmethod
    def from_records(
        cls,
        user_id: str,
        faction_records: Iterable[Mapping[str, Any]] = (),
        skill_records: Iterable[Mapping[str, Any]] = (),
        total_xp: int = 0,
    ) -> Character:
        """
        Build a Character from plain storage rows.

        Stored `level` values on faction rows are ignored; faction level is
        recomputed from `total_xp`.
        """
        factions = [
            FactionProgress(
                faction_id=FactionId.parse(row["faction_id"]),
                total_xp=int(row.get("total_xp") or 0),
                weekly_xp=int(row.get("weekly_xp") or 0),
                monthly_xp=int(row.get("monthly_xp") or 0),
            )
            for row in faction_records
        ]
        skills = [
            SkillProgress(
                skill_id=row["skill_id"],
                level=int(row.get("level") or MIN_LEVEL),
                current_xp=int(row.get("current_xp") or 0),
                faction_id=FactionId.parse(row["faction_id"]) if row.get("faction_id") else None,
            )
            for row in skill_records
        ]
        return cls(user_id, factions=factions, skills=skills, total_xp=int(total_xp or 0))

    def to_records(self) -> Dict[str, Any]:
        """Plain values for the caller's storage layer."""
        return {
            "user_id": self.id,
            "total_xp": self._total_xp,
            "level": self.level,
            "factions": [self._factions[faction_id].to_dict() for faction_id in FactionId],
            "skills": [skill.to_dict() for skill in self._skills.values()],
        }

    def __repr__(self) -> str:
        return (
            f"Character(user_id={self.id!r}, level={self.level}, "
            f"total_xp={self._total_xp}, skills={len(self._skills)})"
        )
