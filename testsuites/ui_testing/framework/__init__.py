"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the Music Tech Shop storefront.

Components:
    - config: YAML + environment configuration, BrowserKind, ShopConfig
    - browser_manager: browser session factory (Edge, Chrome, Firefox)
    - waits: polling primitive and the single stale-element retry policy
    - interactions: waits, actions, and never-raising probes over one page
    - locators: immutable CSS / tag / XPath element descriptions
    - page_base: composition base for page objects and components
    - evidence: screenshot and page-source capture on failure

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager, BrowserSession, build_launch_options
from .config import BrowserKind, ConfigLoader, ShopConfig
from .exceptions import (
    ConfigurationError,
    ElementNotFoundError,
    PagePostconditionError,
    SessionLaunchError,
    StaleElementError,
    UITestError,
    WaitTimeoutError,
)
from .interactions import Interactions
from .locators import Locator
from .page_base import Component, PageBase
from .waits import wait_until, with_stale_retry

__all__ = [
    "BrowserKind",
    "BrowserManager",
    "BrowserSession",
    "Component",
    "ConfigLoader",
    "ConfigurationError",
    "ElementNotFoundError",
    "Interactions",
    "Locator",
    "PagePostconditionError",
    "PageBase",
    "SessionLaunchError",
    "ShopConfig",
    "StaleElementError",
    "UITestError",
    "WaitTimeoutError",
    "build_launch_options",
    "wait_until",
    "with_stale_retry",
]
