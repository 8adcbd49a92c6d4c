"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml)
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Legacy variable aliases kept by the Goodbudget suites (BASE_URL, AUTH_TOKEN, ...)
    - Dot notation path access with default values
    - Typed settings objects for the UI and API suites

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Variables the suites historically read directly from the environment.
# They win over the derived name (api.base_url -> API_BASE_URL).
ENV_ALIASES: Dict[str, str] = {
    "api.base_url": "BASE_URL",
    "api.auth_token": "AUTH_TOKEN",
    "api.timeout": "TIMEOUT",
    "ui.valid_email": "GOODBUDGET_VALID_EMAIL",
    "ui.valid_password": "GOODBUDGET_VALID_PASSWORD",
    "runtime.ci": "CI",
    "runtime.docker": "DOCKER",
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Alias environment variables (BASE_URL, AUTH_TOKEN, TIMEOUT, ...)
        2. Derived environment variables (API_BASE_URL, UI_BASE_URL, ...)
        3. YAML configuration file
        4. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_url", "https://goodbudget.com/api")
        'https://goodbudget.com/api'

        >>> config.get("api.timeout", 30000)
        30000
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Environment variables are checked first, then the YAML config,
        then the default.

        Args:
            key: Dot-notation path (e.g., "api.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        for env_key in self._env_keys(key):
            env_value = os.environ.get(env_key)
            if env_value is not None and env_value != "":
                return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    @staticmethod
    def _env_keys(key: str) -> list[str]:
        keys = []
        alias = ENV_ALIASES.get(key)
        if alias:
            keys.append(alias)
        keys.append(key.upper().replace(".", "_"))
        return keys

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


# =============================================================================
# Typed Settings
# =============================================================================

@dataclass
class ApiSettings:
    """Settings consumed by the transactions API client."""

    base_url: str = "https://goodbudget.com/api"
    auth_token: str = ""
    timeout_ms: int = 30000
    # Declared for parity with the suite's historical config; no retry is performed.
    retry_attempts: int = 3
    retry_delay_ms: int = 1000

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "ApiSettings":
        config = config or ConfigLoader()
        return cls(
            base_url=config.get("api.base_url", cls.base_url),
            auth_token=config.get("api.auth_token", cls.auth_token),
            timeout_ms=config.get("api.timeout", cls.timeout_ms),
            retry_attempts=config.get("api.retry_attempts", cls.retry_attempts),
            retry_delay_ms=config.get("api.retry_delay", cls.retry_delay_ms),
        )


@dataclass
class UiSettings:
    """Settings consumed by the browser suites."""

    base_url: str = "https://www.goodbudget.com"
    valid_email: str = "existinguser@example.com"
    valid_password: str = "defaultPassword123"
    browser: str = "chromium"
    headless: bool = False

    @property
    def valid_username(self) -> str:
        """Goodbudget shows the local part of the e-mail as the household name."""
        return self.valid_email.split("@")[0]

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "UiSettings":
        config = config or ConfigLoader()
        ci = config.get("runtime.ci", False)
        docker = config.get("runtime.docker", False)
        return cls(
            base_url=config.get("ui.base_url", cls.base_url).rstrip("/"),
            valid_email=config.get("ui.valid_email", cls.valid_email),
            valid_password=config.get("ui.valid_password", cls.valid_password),
            browser=config.get("ui.browser", cls.browser),
            headless=bool(ci) or bool(docker),
        )


__all__ = [
    "ApiSettings",
    "ConfigLoader",
    "ConfigurationError",
    "UiSettings",
]
