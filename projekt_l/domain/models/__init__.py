"""
Domain models package for the Projekt L progression engine.

Purpose
-------
Rich domain models that encapsulate progression rules, validation and state
transitions. Services orchestrate these models; storage rows are converted
with Character.from_records() / Character.to_records().

Base Classes
------------
- Entity: Objects with identity
- ValueObject: Immutable value types
- AggregateRoot: Consistency boundaries
- DomainEvent: State change notifications
"""

from .base import (
    AggregateRoot,
    DomainEvent,
    DomainValidationError,
    Entity,
    ValueObject,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
)

from .progression import (
    Character,
    FactionProgress,
    SkillProgress,
    XpAwardResult,
    XpGainEvent,
)

from projekt_l.modules.shared.factions import FACTION_ORDER, FACTIONS, FactionId, FactionInfo

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    "AggregateRoot",
    "DomainEvent",
    "DomainValidationError",
    # Validators
    "validate_positive",
    "validate_non_negative",
    "validate_not_empty",
    # Progression models
    "Character",
    "FactionProgress",
    "SkillProgress",
    "XpGainEvent",
    "XpAwardResult",
    # Faction catalog
    "FactionId",
    "FactionInfo",
    "FACTIONS",
    "FACTION_ORDER",
]
