"""Unit tests for configuration validation."""

import pytest

from alignviz.config import ConfigurationError, Settings, validate_config


class TestSettingsValidation:
    """Tests for Settings validation methods."""

    def test_validation_passes_for_development(self):
        """Test validation passes for development settings."""
        settings = Settings(environment="development")

        issues = settings.validate_for_startup()

        assert issues == []

    def test_debug_in_production_is_critical(self):
        settings = Settings(
            environment="production",
            debug=True,
            publish_dir="/var/lib/alignviz",
            cors_origins=["https://app.example.org"],
        )

        issues = settings.validate_for_startup()

        critical = [i for i in issues if i.startswith("CRITICAL")]
        assert len(critical) == 1
        assert "Debug mode" in critical[0]

    def test_production_warnings(self):
        """Test relative publish dir and open CORS warn in production."""
        settings = Settings(environment="production")

        issues = settings.validate_for_startup()

        warnings = [i for i in issues if i.startswith("WARNING")]
        assert any("PUBLISH_DIR" in w for w in warnings)
        assert any("CORS" in w for w in warnings)
        assert not any(i.startswith("CRITICAL") for i in issues)

    def test_unknown_environment_warns(self):
        issues = Settings(environment="staging").validate_for_startup()
        assert any("Unknown environment" in i for i in issues)

    def test_negative_indent_is_critical(self):
        issues = Settings(json_indent=-1).validate_for_startup()
        assert any(i.startswith("CRITICAL") and "JSON_INDENT" in i for i in issues)

    def test_environment_flags(self):
        assert Settings(environment="production").is_production
        assert Settings(environment="development").is_development

    def test_deterministic_ordering_from_env(self, monkeypatch):
        monkeypatch.setenv("DETERMINISTIC_ORDERING", "true")
        assert Settings().deterministic_ordering is True


class TestValidateConfig:
    """Tests for validate_config."""

    def test_strict_raises_on_critical(self):
        settings = Settings(environment="production", debug=True)

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(settings, strict=True)

        assert len(exc_info.value.issues) == 1
        assert "Configuration validation failed" in str(exc_info.value)

    def test_non_strict_does_not_raise(self):
        settings = Settings(environment="production", debug=True)
        validate_config(settings, strict=False)

    def test_warnings_never_raise(self):
        validate_config(Settings(environment="staging"), strict=True)
