"""
Unit Tests for the Exception Hierarchies
========================================

Test Coverage
-------------
- Error codes, messages and serialization
- Severity lookup across domain and infrastructure errors
"""

import pytest

from projekt_l.core.exceptions import (
    ConfigurationError,
    ProjektLInfrastructureException,
    get_error_severity,
)
from projekt_l.modules.shared.exceptions import (
    ErrorSeverity,
    InvalidOperationError,
    NotFoundError,
    ProjektLDomainException,
    ValidationError,
)


@pytest.mark.unit
class TestDomainExceptions:
    def test_validation_error(self):
        error = ValidationError("amount", "must be an integer")

        assert error.error_code == "VALIDATION_AMOUNT"
        assert error.severity is ErrorSeverity.INFO
        assert str(error).startswith("[VALIDATION_AMOUNT] Validation error for amount")

    def test_not_found_error(self):
        error = NotFoundError("Faction", "hobby")

        assert error.error_code == "FACTION_NOT_FOUND"
        assert error.message == "Faction not found: hobby"
        assert error.details == {"resource_type": "Faction", "identifier": "hobby"}

    def test_not_found_without_identifier(self):
        assert NotFoundError("Skill").message == "Skill not found"

    def test_invalid_operation_error(self):
        error = InvalidOperationError("apply_event", "character target")

        assert error.error_code == "INVALID_APPLY_EVENT"
        assert error.reason == "character target"

    def test_to_dict(self):
        data = NotFoundError("Skill", "yoga").to_dict()

        assert data == {
            "error_type": "NotFoundError",
            "error_code": "SKILL_NOT_FOUND",
            "message": "Skill not found: yoga",
            "details": {"resource_type": "Skill", "identifier": "yoga"},
            "severity": "info",
            "is_retryable": False,
        }

    def test_base_defaults(self):
        error = ProjektLDomainException("XP award rejected")

        assert error.error_code == "ProjektLDomainException"
        assert error.severity is ErrorSeverity.ERROR
        assert str(error) == "[ProjektLDomainException] XP award rejected"
        assert "XP award rejected" in repr(error)


@pytest.mark.unit
class TestInfrastructureExceptions:
    def test_configuration_error(self):
        error = ConfigurationError("LEVEL_UP_ALERT_THRESHOLD", "missing")

        assert error.error_code == "CONFIG_ERROR"
        assert error.config_key == "LEVEL_UP_ALERT_THRESHOLD"
        assert error.to_dict()["severity"] == "critical"

    def test_retryable_override(self):
        error = ProjektLInfrastructureException("Logging queue unavailable", is_retryable=True)

        assert error.is_retryable is True


@pytest.mark.unit
class TestClassification:
    @pytest.mark.parametrize(
        "error,severity",
        [
            (ValidationError("amount", "bad"), ErrorSeverity.INFO),
            (ConfigurationError("KEY", "bad"), ErrorSeverity.CRITICAL),
            (ProjektLDomainException("boom"), ErrorSeverity.ERROR),
            (RuntimeError("boom"), ErrorSeverity.ERROR),
        ],
    )
    def test_get_error_severity(self, error, severity):
        assert get_error_severity(error) is severity
