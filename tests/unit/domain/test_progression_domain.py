"""
Unit Tests for Progression Domain Models
========================================

Purpose
-------
Test the progression rules carried by the domain models without any
storage or service layer.

Test Coverage
-------------
- FactionProgress gains, rolling windows and derived level
- SkillProgress invariants and XP application
- Character skill/faction awards and XP propagation
- Domain event emission (level-ups, balance bonus)
- Conversion from and to storage rows

Testing Strategy
----------------
- Unit tests (fast, no database)
- AAA pattern (Arrange, Act, Assert)
- Test one behavior per test
"""

import pytest

from projekt_l.domain.models import progression as progression_module
from projekt_l.domain.models import (
    Character,
    DomainValidationError,
    FactionId,
    FactionProgress,
    SkillProgress,
    XpGainEvent,
)
from projekt_l.modules.progression.models import ProgressionTarget
from projekt_l.modules.shared.exceptions import NotFoundError
from projekt_l.modules.shared.formulas import xp_for_faction_level, xp_for_level
from tests.conftest import assert_domain_event_emitted, get_domain_event_payload


# ============================================================================
# FACTION PROGRESS TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestFactionProgress:
    """Test FactionProgress value object."""

    def test_defaults(self):
        # Arrange & Act
        progress = FactionProgress(FactionId.BODY)

        # Assert
        assert progress.total_xp == 0
        assert progress.level == 1
        assert progress.progress_percent == 0
        assert progress.xp_to_next_level == 400

    def test_accepts_string_faction(self):
        assert FactionProgress("mind").faction_id is FactionId.MIND

    def test_unknown_faction_rejected(self):
        with pytest.raises(DomainValidationError) as exc_info:
            FactionProgress("hobby")

        assert exc_info.value.field == "faction_id"

    def test_negative_total_rejected(self):
        with pytest.raises(DomainValidationError):
            FactionProgress(FactionId.BODY, total_xp=-1)

    def test_gain_returns_new_instance(self):
        # Arrange
        progress = FactionProgress(FactionId.BODY, total_xp=300)

        # Act
        updated = progress.gain(250)

        # Assert
        assert updated is not progress
        assert progress.total_xp == 300
        assert updated.total_xp == 550
        assert updated.weekly_xp == 250
        assert updated.monthly_xp == 250
        assert updated.level == 2
        assert updated.progress_percent == 30

    def test_penalty_floors_total_at_zero(self):
        updated = FactionProgress(FactionId.BODY, total_xp=100).gain(-500)

        assert updated.total_xp == 0
        assert updated.weekly_xp == -500

    def test_reset_windows(self):
        progress = FactionProgress(FactionId.SOCIAL, total_xp=900, weekly_xp=40, monthly_xp=90)

        assert progress.reset_weekly().weekly_xp == 0
        assert progress.reset_weekly().monthly_xp == 90
        assert progress.reset_monthly().monthly_xp == 0
        assert progress.reset_monthly().total_xp == 900

    def test_level_is_never_stored(self):
        progress = FactionProgress(FactionId.CAREER, total_xp=xp_for_faction_level(4))

        assert progress.level == 4
        assert progress.to_dict()["level"] == 4

    def test_value_equality(self):
        assert FactionProgress(FactionId.BODY, 10) == FactionProgress("body", 10)


# ============================================================================
# SKILL PROGRESS TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestSkillProgress:
    """Test SkillProgress value object."""

    def test_new_skill_starts_at_level_one(self):
        skill = SkillProgress("running")

        assert skill.level == 1
        assert skill.current_xp == 0
        assert skill.faction_id is None

    def test_requires_skill_id(self):
        with pytest.raises(DomainValidationError):
            SkillProgress("  ")

    def test_level_must_be_positive(self):
        with pytest.raises(DomainValidationError) as exc_info:
            SkillProgress("running", level=0)

        assert exc_info.value.field == "level"

    def test_remainder_must_stay_below_next_cost(self):
        with pytest.raises(DomainValidationError) as exc_info:
            SkillProgress("running", level=1, current_xp=xp_for_level(2))

        assert exc_info.value.field == "current_xp"

    def test_negative_remainder_rejected(self):
        with pytest.raises(DomainValidationError):
            SkillProgress("running", current_xp=-1)

    def test_apply_xp(self):
        # Arrange
        skill = SkillProgress("running", faction_id=FactionId.BODY)

        # Act
        updated, result = skill.apply_xp(xp_for_level(2) + xp_for_level(3) + 50)

        # Assert
        assert updated.level == 3
        assert updated.current_xp == 50
        assert updated.faction_id is FactionId.BODY
        assert result.levels_gained == 2
        assert skill.level == 1

    def test_progress_and_remaining(self):
        skill = SkillProgress("running", current_xp=141)

        assert skill.progress_percent == 50
        assert skill.xp_to_next_level == 141

    def test_lifetime_xp(self):
        skill, _ = SkillProgress("running").apply_xp(1000)

        assert skill.lifetime_xp == 1000


# ============================================================================
# XP GAIN EVENT TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestXpGainEvent:
    def test_from_dict(self):
        event = XpGainEvent.from_dict(
            {
                "amount": 120,
                "target": "skill",
                "target_id": "running",
                "source": "habit",
                "faction_override": "mind",
            }
        )

        assert event.target is ProgressionTarget.SKILL
        assert event.faction_override is FactionId.MIND
        assert event.source == "habit"

    def test_from_dict_defaults(self):
        event = XpGainEvent.from_dict({"amount": 5, "target": "FACTION", "target_id": "body"})

        assert event.target is ProgressionTarget.FACTION
        assert event.source == "manual"
        assert event.faction_override is None


# ============================================================================
# CHARACTER TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterInitialization:
    """Test Character aggregate construction."""

    def test_all_factions_present(self, character):
        assert set(character.factions) == set(FactionId)
        assert all(record.total_xp == 0 for record in character.factions.values())

    def test_fresh_character(self, character):
        assert character.level == 1
        assert character.total_xp == 0
        assert character.tier.name == "Beginner"
        assert character.has_balance_bonus is False
        assert character.average_faction_level == 1

    def test_requires_user_id(self):
        with pytest.raises(DomainValidationError):
            Character("")

    def test_rejects_duplicate_skills(self):
        with pytest.raises(DomainValidationError):
            Character("user-1", skills=[SkillProgress("running"), SkillProgress("running")])

    def test_collections_are_copies(self, character):
        character.factions.pop(FactionId.BODY)

        assert FactionId.BODY in character.factions

    def test_unknown_faction_lookup(self, character):
        with pytest.raises(NotFoundError):
            character.get_faction("hobby")


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterSkillAwards:
    """Test award_skill_xp."""

    def test_unknown_skill_created_at_level_one(self, character):
        # Act
        result = character.award_skill_xp("reading", 50)

        # Assert
        assert character.get_skill("reading").current_xp == 50
        assert result.skill.level == 1
        assert assert_domain_event_emitted(character, "skill.assigned")

    def test_xp_routed_to_skill_faction(self, character_with_skill):
        # Act
        result = character_with_skill.award_skill_xp("running", 500)

        # Assert
        assert result.faction_id is FactionId.BODY
        assert character_with_skill.get_faction("body").total_xp == 500
        assert character_with_skill.get_faction("mind").total_xp == 0
        assert character_with_skill.total_xp == 500

    def test_override_wins_over_skill_faction(self, character_with_skill):
        result = character_with_skill.award_skill_xp("running", 500, faction_id="mind")

        assert result.faction_id is FactionId.MIND
        assert character_with_skill.get_faction("mind").total_xp == 500
        assert character_with_skill.get_faction("body").total_xp == 0
        assert character_with_skill.get_skill("running").faction_id is FactionId.BODY

    def test_skill_without_faction_only_feeds_character(self, character):
        result = character.award_skill_xp("juggling", 200)

        assert result.faction_id is None
        assert result.faction_level_before is None
        assert all(record.total_xp == 0 for record in character.factions.values())
        assert character.total_xp == 200

    def test_skill_level_up_event(self, character_with_skill):
        # Act
        character_with_skill.award_skill_xp("running", xp_for_level(2) + xp_for_level(3))

        # Assert
        payload = get_domain_event_payload(character_with_skill, "skill.leveled_up")
        assert payload["old_level"] == 1
        assert payload["new_level"] == 3
        assert payload["levels_gained"] == 2

    def test_faction_level_up_event(self, character_with_skill):
        result = character_with_skill.award_skill_xp("running", 400)

        assert result.faction_leveled_up is True
        payload = get_domain_event_payload(character_with_skill, "faction.leveled_up")
        assert payload == {
            "user_id": "user-1",
            "faction_id": "body",
            "old_level": 1,
            "new_level": 2,
        }

    def test_character_level_up_event(self, character):
        result = character.award_skill_xp("reading", 382)

        assert result.character_leveled_up is True
        assert character.level == 2
        assert get_domain_event_payload(character, "character.leveled_up")["new_level"] == 2

    def test_penalty_never_levels_down(self, character_with_skill):
        # Arrange
        character_with_skill.award_skill_xp("running", 1000)
        skill_level = character_with_skill.get_skill("running").level
        faction_level = character_with_skill.get_faction("body").level

        # Act
        result = character_with_skill.award_skill_xp("running", -5000)

        # Assert
        assert result.skill.level == skill_level
        assert result.skill.current_xp == 0
        assert character_with_skill.get_faction("body").level <= faction_level
        assert character_with_skill.get_faction("body").total_xp == 0
        assert character_with_skill.total_xp == 0
        assert result.levels_gained == 0

    def test_result_lists_events_of_this_award_only(self, character_with_skill):
        character_with_skill.award_skill_xp("running", 10)

        result = character_with_skill.award_skill_xp("running", 10)

        assert [event.event_name for event in result.events] == [
            "skill.xp_gained",
            "faction.xp_gained",
        ]

    def test_result_to_dict(self, character_with_skill):
        data = character_with_skill.award_skill_xp("running", 300).to_dict()

        assert data["target"] == "skill"
        assert data["faction_id"] == "body"
        assert data["skill_result"]["leveled_up"] is True
        assert "skill.leveled_up" in data["events"]


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterFactionAwards:
    """Test award_faction_xp and the balance bonus."""

    def test_direct_faction_award(self, character):
        result = character.award_faction_xp("finance", 900)

        assert result.faction_level_after == 3
        assert result.skill is None
        assert character.get_faction(FactionId.FINANCE).level == 3
        assert character.total_xp == 900

    def test_unknown_faction(self, character):
        with pytest.raises(NotFoundError):
            character.award_faction_xp("hobby", 10)

    def test_balance_bonus_unlocked(self, make_character):
        # Arrange
        levels = {faction_id.value: 3 for faction_id in FactionId}
        levels["knowledge"] = 2
        character = make_character(levels)

        # Act
        result = character.award_faction_xp("knowledge", 500)

        # Assert
        assert result.balance_bonus is True
        assert character.has_balance_bonus is True
        assert assert_domain_event_emitted(character, "character.balance_bonus_unlocked")

    def test_balance_bonus_lost(self, make_character):
        character = make_character({faction_id.value: 3 for faction_id in FactionId})

        character.award_faction_xp("social", -1)

        assert character.has_balance_bonus is False
        assert assert_domain_event_emitted(character, "character.balance_bonus_lost")

    def test_no_bonus_event_without_change(self, character):
        character.award_faction_xp("body", 10_000)

        assert not assert_domain_event_emitted(character, "character.balance_bonus_unlocked")

    def test_character_level_resolved_before_and_after_only(self, character, mocker):
        # Arrange
        spy = mocker.spy(progression_module._CHARACTER_MODEL, "level_for_xp")

        # Act
        result = character.award_faction_xp("body", 10_000)

        # Assert
        assert spy.call_count == 2
        assert result.character_leveled_up is True
        assert result.character_level_after == character.level

    def test_weekly_and_monthly_resets(self, character):
        character.award_faction_xp("body", 100)

        character.reset_weekly()
        assert character.get_faction("body").weekly_xp == 0
        assert character.get_faction("body").monthly_xp == 100

        character.reset_monthly()
        assert character.get_faction("body").monthly_xp == 0
        assert character.get_faction("body").total_xp == 100


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterRecords:
    """Test conversion from and to storage rows."""

    def test_from_records_ignores_stored_faction_level(self):
        character = Character.from_records(
            "user-9",
            faction_records=[{"faction_id": "body", "total_xp": 2500, "level": 99}],
            skill_records=[{"skill_id": "yoga", "level": 2, "current_xp": 10, "faction_id": "mind"}],
            total_xp=1234,
        )

        assert character.get_faction("body").level == 5
        assert character.get_skill("yoga").faction_id is FactionId.MIND
        assert character.total_xp == 1234

    def test_round_trip(self, character_with_skill):
        character_with_skill.award_skill_xp("running", 777)
        records = character_with_skill.to_records()

        restored = Character.from_records(
            records["user_id"],
            faction_records=records["factions"],
            skill_records=records["skills"],
            total_xp=records["total_xp"],
        )

        assert restored.to_records() == records

    def test_drained_events(self, character):
        character.award_faction_xp("body", 400)

        events = character.clear_domain_events()

        assert [event.event_name for event in events] == [
            "faction.xp_gained",
            "faction.leveled_up",
            "character.leveled_up",
        ]
        assert character.get_pending_events() == []
