"""
tickrisk: Configuration Management

This module provides centralised configuration management for tickrisk.
It loads configuration from environment variables (optionally via a .env
file), with strongly typed access via Pydantic BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration objects for logging and the risk engine
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Thread safety: Thread-safe (configuration is immutable after initial load)

Author: tickrisk Team
Created: 2026-10-18
Last Modified: 2026-10-18
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# ============================================================================
# Data Models
# ============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration for tickrisk.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the log file; empty means console output only.
    """

    level: str = "INFO"
    file: str = ""


class RiskEngineConfig(BaseModel):
    """Behavioural switches for :class:`tickrisk.risk.engine.RiskEngine`.

    Attributes:
        cache_enabled: When ``True`` the engine memoises the last risk
            value and only rebuilds the covariance matrix when the
            fingerprint of its members changes. When ``False`` every
            ``calculate_risk`` call rebuilds the matrix.
    """

    cache_enabled: bool = True


class TickriskConfig(BaseSettings):
    """Main tickrisk configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    - RISK_CACHE_ENABLED for the risk engine cache switch

    Environment variables take precedence over any other configuration
    source.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Risk engine
    risk_cache_enabled: bool = Field(default=True, alias="RISK_CACHE_ENABLED")

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)

    @property
    def risk_engine(self) -> RiskEngineConfig:
        """Return risk engine configuration.

        Environment variables:
        - RISK_CACHE_ENABLED
        """

        return RiskEngineConfig(cache_enabled=self.risk_cache_enabled)


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> TickriskConfig:
    """Load tickrisk configuration.

    For local development this function will attempt to load a `.env` file
    from the current working directory if one is present. Environment
    variables always take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`TickriskConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file overrides existing values so that tests
        # and local runs can reliably control configuration.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return TickriskConfig()  # type: ignore[call-arg]


_global_config: Optional[TickriskConfig] = None


def get_config() -> TickriskConfig:
    """Return the global tickrisk configuration singleton.

    The configuration is loaded on first access (lazy loading) and cached
    for subsequent calls.

    Returns:
        A cached :class:`TickriskConfig` instance.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config
