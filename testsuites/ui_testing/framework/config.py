"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration with live override support for the shop UI suite.

Resolution order (highest to lowest priority):
    1. Explicit overrides (pytest command-line options)
    2. Environment variables (SHOP_BASE_URL overrides base.url)
    3. YAML configuration file (config/config.yaml)
    4. Built-in defaults

Overrides are read on every call, the YAML file only once. Tests never hold
the loader itself: they receive an immutable ShopConfig snapshot.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger

from .exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

DEFAULT_BASE_URL = "https://music-tech-shop.vercel.app"
DEFAULT_PAGE_LOAD_TIMEOUT = 30
DEFAULT_IMPLICIT_WAIT = 5
DEFAULT_EXPLICIT_WAIT = 10
DEFAULT_ARTIFACTS_DIR = "reports/artifacts"

TRUTHY = ("true", "1", "yes", "on")

# Prefix keeps generic names like BROWSER or HEADLESS set by CI images out
ENV_PREFIX = "SHOP_"


def env_name(key: str) -> str:
    """Environment variable for a dotted key: base.url -> SHOP_BASE_URL."""
    return ENV_PREFIX + key.upper().replace(".", "_")


class BrowserKind(str, Enum):
    """Supported browsers. EDGE is the primary one."""

    EDGE = "edge"
    CHROME = "chrome"
    FIREFOX = "firefox"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BrowserKind":
        """
        Parse a browser name case-insensitively.

        Empty, missing, and unknown names fall back to EDGE.
        """
        if value is None:
            return cls.EDGE
        name = str(value).strip().lower()
        for kind in cls:
            if kind.value == name:
                return kind
        if name:
            logger.warning(f"Unknown browser '{value}', falling back to {cls.EDGE.value}")
        return cls.EDGE

    @property
    def is_chromium(self) -> bool:
        return self in (BrowserKind.EDGE, BrowserKind.CHROME)


@dataclass(frozen=True)
class ShopConfig:
    """Resolved settings for one test. Timeouts are in seconds."""

    base_url: str = DEFAULT_BASE_URL
    browser: BrowserKind = BrowserKind.EDGE
    headless: bool = False
    page_load_timeout: int = DEFAULT_PAGE_LOAD_TIMEOUT
    implicit_wait: int = DEFAULT_IMPLICIT_WAIT
    explicit_wait: int = DEFAULT_EXPLICIT_WAIT
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR

    def url_for(self, path: str = "/") -> str:
        """Join a route path onto the base URL."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url.rstrip('/')}{path}"


class ConfigLoader:
    """
    Configuration loader with YAML, environment, and explicit overrides.

    Usage:
        >>> loader = ConfigLoader(overrides={"browser": "firefox"})
        >>> loader.browser_kind
        <BrowserKind.FIREFOX: 'firefox'>
        >>> config = loader.snapshot()

    Environment Variable Mapping:
        - base.url -> SHOP_BASE_URL
        - timeout.seconds -> SHOP_TIMEOUT_SECONDS
        - browser -> SHOP_BROWSER
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
            overrides: Explicit key/value overrides, e.g. from pytest options
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._overrides: Dict[str, Any] = dict(overrides or {})
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and overrides only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if not isinstance(self._config, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self._config_path}"
            )
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def set_override(self, key: str, value: Any) -> None:
        """Set (or clear with None) an explicit override."""
        if value is None:
            self._overrides.pop(key, None)
        else:
            self._overrides[key] = value

    def _override_for(self, key: str) -> Optional[Any]:
        value = self._overrides.get(key)
        if value is not None and str(value).strip() != "":
            return value

        env_value = os.environ.get(env_name(key))
        if env_value is not None and env_value.strip() != "":
            return env_value
        return None

    def _file_value(self, key: str) -> Optional[Any]:
        # Flat dotted keys ("base.url: ...") win over nested sections
        if key in self._config:
            return self._config[key]

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation key.

        Args:
            key: Dot-notation path (e.g., "base.url")
            default: Default value if key not found anywhere

        Returns:
            Override value, file value, or default (in that order)
        """
        value = self._override_for(key)
        if value is not None:
            return value

        value = self._file_value(key)
        if value is not None:
            return value

        return default

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def _get_int(self, key: str, default: int) -> int:
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from e

    @property
    def base_url(self) -> str:
        return str(self.get("base.url", DEFAULT_BASE_URL)).rstrip("/")

    @property
    def browser_kind(self) -> BrowserKind:
        return BrowserKind.parse(self.get("browser"))

    @property
    def headless(self) -> bool:
        value = self.get("headless", False)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUTHY

    @property
    def page_load_timeout(self) -> int:
        return self._get_int("timeout.seconds", DEFAULT_PAGE_LOAD_TIMEOUT)

    @property
    def implicit_wait(self) -> int:
        return self._get_int("implicit.wait.seconds", DEFAULT_IMPLICIT_WAIT)

    @property
    def explicit_wait(self) -> int:
        return self._get_int("explicit.wait.seconds", DEFAULT_EXPLICIT_WAIT)

    @property
    def artifacts_dir(self) -> str:
        return str(self.get("artifacts.dir", DEFAULT_ARTIFACTS_DIR))

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    def snapshot(self) -> ShopConfig:
        """Resolve every setting once into an immutable ShopConfig."""
        config = ShopConfig(
            base_url=self.base_url,
            browser=self.browser_kind,
            headless=self.headless,
            page_load_timeout=self.page_load_timeout,
            implicit_wait=self.implicit_wait,
            explicit_wait=self.explicit_wait,
            artifacts_dir=self.artifacts_dir,
        )
        logger.debug(f"Resolved configuration: {config}")
        return config


__all__ = [
    "BrowserKind",
    "ShopConfig",
    "ConfigLoader",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_BASE_URL",
    "env_name",
]
