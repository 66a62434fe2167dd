"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

KNOWN_ENVIRONMENTS = ("development", "test", "production")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_prefix: str = "/api/v1"
    api_title: str = "Alignment Visualization Server"
    api_version: str = "0.1.0"
    cors_origins: List[str] = ["*"]

    # Export
    deterministic_ordering: bool = False  # Sort non-anchor nodes and links by id
    json_indent: Optional[int] = None  # Pretty-print exported documents

    # Published artifacts
    publish_dir: str = "publish"
    publish_relative_dir: str = "publish"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_for_startup(self) -> list[str]:
        """
        Validate configuration for production readiness.

        Returns a list of warnings/errors. Empty list means all validations passed.
        """
        issues: list[str] = []

        if self.is_production:
            if self.debug:
                issues.append(
                    "CRITICAL: Debug mode is enabled in production. "
                    "Set DEBUG=false."
                )

            if not self.publish_dir.startswith("/"):
                issues.append(
                    "WARNING: PUBLISH_DIR is a relative path in production. "
                    f"Artifacts will be written under the working directory ({self.publish_dir})."
                )

            if "*" in self.cors_origins:
                issues.append(
                    "WARNING: CORS allows all origins (*) in production. "
                    "Consider restricting to specific origins."
                )

        if self.environment not in KNOWN_ENVIRONMENTS:
            issues.append(
                f"WARNING: Unknown environment '{self.environment}'. "
                f"Expected one of: {', '.join(KNOWN_ENVIRONMENTS)}."
            )

        if self.json_indent is not None and self.json_indent < 0:
            issues.append(
                "CRITICAL: JSON_INDENT must be a non-negative integer."
            )

        return issues


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        message = "Configuration validation failed:\n" + "\n".join(f"  - {i}" for i in issues)
        super().__init__(message)


def validate_config(settings: Settings, strict: bool = False) -> None:
    """
    Validate configuration and log/raise issues.

    Args:
        settings: Settings instance to validate
        strict: If True, raise ConfigurationError on any critical issues

    Raises:
        ConfigurationError: If strict=True and critical issues found
    """
    from alignviz.logging_config import get_logger

    logger = get_logger(__name__)

    issues = settings.validate_for_startup()

    critical_issues = [i for i in issues if i.startswith("CRITICAL")]
    warnings = [i for i in issues if i.startswith("WARNING")]

    for warning in warnings:
        logger.warning(warning.replace("WARNING: ", ""))

    for critical in critical_issues:
        logger.error(critical.replace("CRITICAL: ", ""))

    if strict and critical_issues:
        raise ConfigurationError(critical_issues)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
