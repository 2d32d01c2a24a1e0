"""
Unit Tests for Static Configuration
===================================

Test Coverage
-------------
- Environment parsing with fallback
- Safe int/bool parsing with defaults on bad input
- LOG_LEVEL validation (fallback outside production, error in production)
- Cached validation and reset
- Configuration summary
"""

import pytest

from projekt_l.core.config import Config, ConfigValidationError, Environment


@pytest.mark.unit
class TestEnvironment:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("production", Environment.PRODUCTION),
            ("PRODUCTION", Environment.PRODUCTION),
            ("testing", Environment.TESTING),
            ("staging", Environment.STAGING),
        ],
    )
    def test_known_values(self, value, expected):
        assert Environment.from_string(value) is expected

    def test_unknown_value_falls_back_to_development(self):
        assert Environment.from_string("qa-cluster") is Environment.DEVELOPMENT


@pytest.mark.unit
class TestConfigLoading:
    """Test Config.load()/validate() against the process environment."""

    def test_testing_environment(self):
        Config.validate()

        assert Config.is_testing() is True
        assert Config.is_production() is False
        assert Config.LOG_LEVEL == "DEBUG"
        assert Config.LOG_TO_FILE is False

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("LEVEL_UP_ALERT_THRESHOLD", "25")

        Config.validate()

        assert Config.LEVEL_UP_ALERT_THRESHOLD == 25

    @pytest.mark.parametrize("raw", ["abc", "0", "100000"])
    def test_invalid_threshold_uses_default(self, monkeypatch, raw):
        # Arrange
        monkeypatch.setenv("LEVEL_UP_ALERT_THRESHOLD", raw)

        # Act
        Config.validate()

        # Assert
        assert Config.LEVEL_UP_ALERT_THRESHOLD == 10
        assert "LEVEL_UP_ALERT_THRESHOLD" in Config.get_metrics().validation_errors

    @pytest.mark.parametrize("raw,expected", [("yes", True), ("OFF", False), ("maybe", None)])
    def test_optional_json_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("LOG_JSON", raw)

        Config.validate()

        assert Config.LOG_JSON is expected

    def test_json_flag_unset(self, monkeypatch):
        monkeypatch.delenv("LOG_JSON", raising=False)

        Config.validate()

        assert Config.LOG_JSON is None

    def test_invalid_bool_uses_default(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "sometimes")

        Config.validate()

        assert Config.DEBUG is False

    def test_logs_dir_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOGS_DIR", str(tmp_path))

        Config.validate()

        assert Config.LOGS_DIR == tmp_path


@pytest.mark.unit
class TestConfigValidation:
    """Test LOG_LEVEL validation."""

    def test_invalid_level_falls_back_outside_production(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        Config.validate()

        assert Config.LOG_LEVEL == "INFO"
        assert "LOG_LEVEL" in Config.get_metrics().validation_errors

    def test_invalid_level_raises_in_production(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        # Act & Assert
        with pytest.raises(ConfigValidationError):
            Config.validate()

    def test_validation_is_cached_until_reset(self, monkeypatch):
        # Arrange
        Config.validate()
        monkeypatch.setenv("LEVEL_UP_ALERT_THRESHOLD", "42")

        # Act
        Config.validate()
        cached = Config.LEVEL_UP_ALERT_THRESHOLD
        Config.reset()
        Config.validate()

        # Assert
        assert cached == 10
        assert Config.LEVEL_UP_ALERT_THRESHOLD == 42


@pytest.mark.unit
class TestConfigSummary:
    def test_summary_contents(self, monkeypatch):
        monkeypatch.setenv("LEVEL_UP_ALERT_THRESHOLD", "12")
        Config.validate()

        summary = Config.get_config_summary()

        assert summary["environment"] == "testing"
        assert summary["level_up_alert_threshold"] == 12
        assert summary["load_metrics"]["validation_errors"] == 0
        assert "LEVEL_UP_ALERT_THRESHOLD" not in summary["load_metrics"]["defaults_used"]
        assert summary["load_metrics"]["last_reload"] is not None
