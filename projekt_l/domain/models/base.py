"""
Base domain model classes for the Projekt L progression engine.

Purpose
-------
Foundational abstractions for the rich progression models: identity-bearing
entities, immutable value objects, aggregate roots that collect domain events,
and the validation helpers their constructors use.

Non-Responsibilities
--------------------
- Persistence (the caller loads and stores aggregates)
- Event delivery (callers drain events with clear_domain_events())
- Service orchestration (handled by the service layer)

Design Patterns
---------------
- **Entity**: Objects with identity that persist over time
- **Value Object**: Immutable objects defined by their attributes
- **Aggregate Root**: Consistency boundary for domain operations
- **Domain Events**: Communicate state changes to the calling application

Usage Example
-------------
>>> class Character(AggregateRoot):
...     def __init__(self, user_id: str, level: int):
...         super().__init__(user_id)
...         self.level = level
...
...     def level_up(self) -> None:
...         self.level += 1
...         self.add_domain_event("character.leveled_up", {
...             "user_id": self.id,
...             "new_level": self.level,
...         })
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Hashable, List, Optional


# ============================================================================
# DOMAIN EVENTS
# ============================================================================


@dataclass
class DomainEvent:
    """
    A state change that already happened inside an aggregate.

    Attributes
    ----------
    event_name : str
        Event name (e.g., "skill.leveled_up")
    payload : Dict[str, Any]
        Event payload with relevant data
    occurred_at : datetime
        When the event occurred (UTC)
    """

    event_name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_name": self.event_name,
            "payload": dict(self.payload),
            "occurred_at": self.occurred_at.isoformat(),
        }


# ============================================================================
# VALUE OBJECT
# ============================================================================


class ValueObject(ABC):
    """
    Base class for immutable value objects.

    Value objects are defined by their attributes, not by identity. The
    progression value objects are frozen dataclasses, which supply equality
    and hashing; this base marks them and gives them a `_validate()` hook
    called from `__post_init__`.
    """

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """
        Validate invariants.

        Subclasses override this and raise DomainValidationError.
        """


# ============================================================================
# ENTITY
# ============================================================================


class Entity(ABC):
    """
    Base class for entities with identity.

    Two entities with the same ID are the same entity, even if their
    attributes differ. Entities record domain events for significant state
    changes; the caller drains them after persisting.
    """

    def __init__(self, entity_id: Hashable) -> None:
        self._id = entity_id
        self._domain_events: List[DomainEvent] = []

    @property
    def id(self) -> Hashable:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def add_domain_event(self, event_name: str, payload: Dict[str, Any]) -> None:
        """
        Record a domain event to be published by the caller.

        Examples
        --------
        >>> self.add_domain_event("faction.leveled_up", {
        ...     "user_id": self.id,
        ...     "faction_id": "body",
        ...     "new_level": 3,
        ... })
        """
        self._domain_events.append(DomainEvent(event_name=event_name, payload=payload))

    def clear_domain_events(self) -> List[DomainEvent]:
        """
        Clear and return all domain events.

        Called by the caller after persisting the entity and publishing its
        events.
        """
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events

    def get_pending_events(self) -> List[DomainEvent]:
        return self._domain_events.copy()


# ============================================================================
# AGGREGATE ROOT
# ============================================================================


class AggregateRoot(Entity):
    """
    Base class for aggregate roots.

    The aggregate root is the single entry point for changes to the cluster
    of value objects it owns; it keeps their invariants consistent and emits
    the domain events describing each change.
    """

    pass


# ============================================================================
# DOMAIN MODEL VALIDATION
# ============================================================================


class DomainValidationError(Exception):
    """
    Raised when a domain model would be constructed in an invalid state.

    Parameters
    ----------
    message : str
        Human-readable error message
    field : Optional[str]
        Field name that failed validation (if applicable)
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def validate_positive(value: int, field_name: str) -> None:
    if value <= 0:
        raise DomainValidationError(
            f"{field_name} must be positive, got {value}",
            field=field_name,
        )


def validate_non_negative(value: int, field_name: str) -> None:
    if value < 0:
        raise DomainValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name,
        )


def validate_not_empty(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainValidationError(
            f"{field_name} cannot be empty",
            field=field_name,
        )
