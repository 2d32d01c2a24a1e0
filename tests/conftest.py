"""
Pytest Configuration and Fixtures for the Projekt L Progression Tests
=====================================================================

Purpose
-------
Centralized fixtures for the progression test suite: a clean configuration
per test, mocked loggers, the progression service and Character factories.

Architecture Notes
------------------
- Unit tests only; the engine has no database, network or bot surface
- Mocks come from pytest-mock's `mocker`
- Domain event helpers mirror how callers drain aggregate events
"""

from __future__ import annotations

import os

import pytest

from projekt_l.core.config import Config
from projekt_l.core.logging import clear_log_context
from projekt_l.domain.models import Character, FactionId, FactionProgress, SkillProgress
from projekt_l.modules.progression import ProgressionService
from projekt_l.modules.shared.formulas import xp_for_faction_level

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["ENVIRONMENT"] = "testing"
    os.environ["LOG_LEVEL"] = "DEBUG"
    os.environ["LOG_TO_FILE"] = "false"


@pytest.fixture(autouse=True)
def clean_config_and_context():
    """Reload Config from the environment and drop log context around each test."""
    Config.reset()
    clear_log_context()
    yield
    Config.reset()
    clear_log_context()


# ============================================================================
# MOCK FIXTURES
# ============================================================================


@pytest.fixture
def mock_logger(mocker):
    """
    Mock logger for service tests.

    Returns:
        MagicMock standing in for logging.Logger
    """
    return mocker.MagicMock()


@pytest.fixture
def progression_service(mock_logger):
    return ProgressionService(logger=mock_logger)


# ============================================================================
# DOMAIN MODEL FACTORIES
# ============================================================================


@pytest.fixture
def character():
    """Fresh character: every faction at 0 XP, no skills."""
    return Character("user-1")


@pytest.fixture
def character_with_skill():
    """Character owning a level-1 'running' skill mapped to the body faction."""
    return Character(
        "user-1",
        skills=[SkillProgress("running", faction_id=FactionId.BODY)],
    )


@pytest.fixture
def make_character():
    """
    Factory for characters with given faction levels.

    Usage:
        character = make_character({"body": 3, "mind": 2})
    """

    def _make(faction_levels=None, skills=(), total_xp=0, user_id="user-1"):
        factions = [
            FactionProgress(FactionId.parse(faction_id), total_xp=xp_for_faction_level(level))
            for faction_id, level in (faction_levels or {}).items()
        ]
        return Character(user_id, factions=factions, skills=list(skills), total_xp=total_xp)

    return _make


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def assert_domain_event_emitted(domain_model, event_name: str) -> bool:
    """
    Check that a domain model emitted a specific event.

    Usage:
        character.award_skill_xp("running", 500)
        assert assert_domain_event_emitted(character, "skill.leveled_up")
    """
    events = domain_model.get_pending_events()
    return any(event.event_name == event_name for event in events)


def get_domain_event_payload(domain_model, event_name: str) -> dict | None:
    """
    Payload of the first pending event with this name.

    Usage:
        payload = get_domain_event_payload(character, "faction.leveled_up")
        assert payload["new_level"] == 2
    """
    for event in domain_model.get_pending_events():
        if event.event_name == event_name:
            return event.payload
    return None
