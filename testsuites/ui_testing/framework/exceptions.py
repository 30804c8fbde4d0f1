"""
================================================================================
UI Framework Exceptions
================================================================================

Error taxonomy shared by the interaction layer and the page objects.

    UITestError
    ├── WaitTimeoutError        a wait predicate never became true
    ├── StaleElementError       an element handle outlived its DOM node
    ├── ElementNotFoundError    zero elements matched a locator
    ├── SessionLaunchError      the browser could not be started
    └── ConfigurationError      configuration could not be loaded or parsed

PagePostconditionError is also an AssertionError so pytest reports it as a
plain assertion failure with a business-level message.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class UITestError(Exception):
    """Base class for UI framework errors."""


class WaitTimeoutError(UITestError):
    """Raised when a wait operation times out."""

    def __init__(self, description: str, timeout: float, last_error: Optional[BaseException] = None):
        self.description = description
        self.timeout = timeout
        self.last_error = last_error
        message = f"Timed out after {timeout:.1f}s waiting for {description}"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)


class StaleElementError(UITestError):
    """Raised when an element handle points to a node that left the DOM."""


class ElementNotFoundError(UITestError):
    """Raised when no element matches a locator."""


class SessionLaunchError(UITestError):
    """Raised when a browser session cannot be launched."""


class ConfigurationError(UITestError):
    """Raised when configuration loading or access fails."""


class PagePostconditionError(UITestError, AssertionError):
    """Raised by a page object when a business postcondition is not met."""


__all__ = [
    "UITestError",
    "WaitTimeoutError",
    "StaleElementError",
    "ElementNotFoundError",
    "SessionLaunchError",
    "ConfigurationError",
    "PagePostconditionError",
]
