"""
Configuration management for the jiralog report tool.

This module provides centralized configuration with:
- Jira client settings (REST API version, TLS verification, timeout)
- Git traversal defaults
- Logging configuration

Values may be overridden through ``JIRALOG_``-prefixed environment
variables, e.g. ``JIRALOG_JIRA__API_VERSION=3``.
"""

from functools import lru_cache
from typing import Optional, Dict, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class JiraSettings(BaseSettings):
    """Jira REST client configuration settings."""

    api_version: str = Field(default="2", description="Jira REST API version")
    strict_ssl: bool = Field(default=True, description="Verify TLS certificates")
    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (unset uses the HTTP client default)",
    )

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v):
        if v not in ("2", "3", "latest"):
            raise ValueError("Jira API version must be one of: 2, 3, latest")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    model_config = {"env_prefix": "JIRALOG_JIRA_", "extra": "ignore"}


class GitSettings(BaseSettings):
    """Git traversal configuration settings."""

    repo_path: str = Field(default=".", description="Default repository path")
    head_ref: str = Field(default="HEAD", description="Reference the walk starts from")

    model_config = {"env_prefix": "JIRALOG_GIT_", "extra": "ignore"}


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    model_config = {"env_prefix": "JIRALOG_MONITORING_", "extra": "ignore"}


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(default="jiralog", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")

    jira: JiraSettings = Field(default_factory=JiraSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_prefix": "JIRALOG_",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object

    Example:
        >>> settings = get_settings()
        >>> print(settings.jira.api_version)
    """
    return Settings()


# Global settings instance
settings = get_settings()


def export_config() -> Dict[str, Any]:
    """Export configuration for diagnostics (contains no credentials)."""
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "jira": {
            "api_version": settings.jira.api_version,
            "strict_ssl": settings.jira.strict_ssl,
            "timeout": settings.jira.timeout,
        },
        "git": {
            "repo_path": settings.git.repo_path,
            "head_ref": settings.git.head_ref,
        },
        "monitoring": {
            "log_level": settings.monitoring.log_level,
        },
    }
