"""
================================================================================
Browser Manager
================================================================================

Browser session factory for UI automation.

Features:
    - One isolated session (Playwright + browser + context + page) per test
    - Edge, Chrome, and Firefox launch presets
    - Fixed 1920x1080 window and viewport
    - Timeouts applied from ShopConfig
    - Fail-fast launch: no retry when the browser cannot start

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from .config import BrowserKind, ShopConfig
from .exceptions import SessionLaunchError


WINDOW_SIZE: Tuple[int, int] = (1920, 1080)

CHROMIUM_CHANNELS: Dict[BrowserKind, str] = {
    BrowserKind.EDGE: "msedge",
    BrowserKind.CHROME: "chrome",
}

CHROMIUM_ARGS: List[str] = [
    f"--window-size={WINDOW_SIZE[0]},{WINDOW_SIZE[1]}",
    "--disable-gpu",
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-infobars",
    "--remote-allow-origins=*",
    "--start-maximized",
]

FIREFOX_ARGS: List[str] = [
    f"--width={WINDOW_SIZE[0]}",
    f"--height={WINDOW_SIZE[1]}",
]

HEADLESS_FLAGS: Dict[BrowserKind, str] = {
    BrowserKind.EDGE: "--headless=new",
    BrowserKind.CHROME: "--headless=new",
    BrowserKind.FIREFOX: "-headless",
}

DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
    "viewport": {"width": WINDOW_SIZE[0], "height": WINDOW_SIZE[1]},
    "ignore_https_errors": True,
}


def build_launch_options(kind: BrowserKind, headless: bool) -> Dict[str, Any]:
    """
    Build launcher keyword arguments for a browser kind.

    Args:
        kind: Browser to launch
        headless: Add the kind-specific headless flag

    Returns:
        Keyword arguments for `BrowserType.launch()`
    """
    if kind.is_chromium:
        args = list(CHROMIUM_ARGS)
        options: Dict[str, Any] = {"channel": CHROMIUM_CHANNELS[kind]}
    else:
        args = list(FIREFOX_ARGS)
        options = {}

    if headless:
        args.append(HEADLESS_FLAGS[kind])

    options.update({"headless": headless, "args": args})
    return options


class BrowserSession:
    """
    A single browser bound to one test.

    Never shared between tests. `close()` is safe to call more than once.
    """

    def __init__(
        self,
        kind: BrowserKind,
        config: ShopConfig,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
    ):
        self.kind = kind
        self.config = config
        self.headless = config.headless
        self.window_size = WINDOW_SIZE
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed or self.page.is_closed()

    async def close(self) -> None:
        """Close context, browser, and Playwright, in that order."""
        if self._closed:
            return
        self._closed = True

        for name, closer in (
            ("context", self.context.close),
            ("browser", self.browser.close),
            ("playwright", self.playwright.stop),
        ):
            try:
                await closer()
            except PlaywrightError as e:
                logger.debug(f"Ignoring error while closing {name}: {e}")

        logger.debug(f"Browser session closed: {self.kind.value}")

    def __repr__(self) -> str:
        return f"BrowserSession(kind={self.kind.value}, headless={self.headless}, closed={self._closed})"


class BrowserManager:
    """
    Creates browser sessions from a ShopConfig.

    Usage:
        async with BrowserManager(config) as manager:
            session = await manager.create_session()
            await session.page.goto(config.base_url)

        # Or standalone, closing the session yourself
        session = await BrowserManager(config).create_session(BrowserKind.FIREFOX)
        await session.close()
    """

    def __init__(self, config: ShopConfig):
        self.config = config
        self._sessions: List[BrowserSession] = []

    async def __aenter__(self) -> "BrowserManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def create_session(self, kind: Optional[BrowserKind] = None) -> BrowserSession:
        """
        Launch a browser and open a page.

        Args:
            kind: Browser to launch. Defaults to the configured browser.

        Raises:
            SessionLaunchError: If the browser cannot be started
        """
        kind = kind or self.config.browser
        options = build_launch_options(kind, self.config.headless)

        playwright = await async_playwright().start()
        browser: Optional[Browser] = None
        try:
            launcher = playwright.firefox if kind is BrowserKind.FIREFOX else playwright.chromium
            browser = await launcher.launch(**options)
            context = await browser.new_context(**DEFAULT_CONTEXT_OPTIONS)
            context.set_default_timeout(self.config.implicit_wait * 1000)
            context.set_default_navigation_timeout(self.config.page_load_timeout * 1000)
            page = await context.new_page()
        except PlaywrightError as e:
            if browser is not None:
                await browser.close()
            await playwright.stop()
            raise SessionLaunchError(f"Could not launch {kind.value}: {e}") from e

        session = BrowserSession(kind, self.config, playwright, browser, context, page)
        self._sessions.append(session)
        logger.info(
            f"Browser started: {kind.value} (headless={self.config.headless}, "
            f"window={WINDOW_SIZE[0]}x{WINDOW_SIZE[1]})"
        )
        return session

    async def close(self) -> None:
        """Close every session created by this manager."""
        for session in self._sessions:
            await session.close()
        self._sessions.clear()


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "build_launch_options",
    "WINDOW_SIZE",
]
