"""
================================================================================
Element Interactions
================================================================================

The synchronization layer every page object composes.

Two kinds of operation live here:
    - Hard actions (waits, click, type, navigate) raise WaitTimeoutError or
      StaleElementError when they cannot complete.
    - Probes (is_displayed, is_enabled, is_element_present, element_count)
      never raise; they log at debug level and return False / 0.

DOM, URL and script waits go through Playwright (wait_for_selector,
wait_for_url, wait_for_function) bounded by the explicit wait from
ShopConfig; a Playwright timeout surfaces as WaitTimeoutError. Only the
compound conditions Playwright has no predicate for (visible AND enabled,
minimum match count, listing settled) poll through `wait_until`.
Playwright "element is not attached" errors are translated into
StaleElementError so the one-retry policy in `with_stale_retry` can act
on them.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import ElementHandle, Error as PlaywrightError, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import ShopConfig
from .exceptions import StaleElementError, WaitTimeoutError
from .locators import Locator
from .waits import DEFAULT_POLL_INTERVAL, wait_until, with_stale_retry


# Fragments of Playwright error messages that mean the node went away
STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "detached from document",
    "node is detached",
    "execution context was destroyed",
    "element handle is disposed",
)

# Errors a query method degrades on instead of propagating
QUERY_ERRORS = (PlaywrightError, StaleElementError, WaitTimeoutError)

SCROLL_INTO_VIEW_JS = "el => el.scrollIntoView({behavior: 'smooth', block: 'center'})"
SCROLL_TO_BOTTOM_JS = "() => window.scrollTo(0, document.body.scrollHeight)"
PAGE_COMPLETE_JS = "() => document.readyState === 'complete'"
NO_ANIMATIONS_JS = "() => document.getAnimations().length === 0"
ACTIVE_ELEMENT_JS = """() => {
    const el = document.activeElement;
    if (!el) return {};
    return {
        tag: el.tagName.toLowerCase(),
        testid: el.getAttribute('data-testid') || '',
        aria_label: el.getAttribute('aria-label') || '',
        text: (el.innerText || '').trim().slice(0, 100),
    };
}"""


def is_stale_error(error: BaseException) -> bool:
    """Whether a Playwright error means the element left the DOM."""
    message = str(error).lower()
    return any(marker in message for marker in STALE_MARKERS)


async def guarded(awaitable: Any) -> Any:
    """Await a Playwright call, translating detached-node errors."""
    try:
        return await awaitable
    except PlaywrightError as e:
        if is_stale_error(e):
            raise StaleElementError(str(e)) from e
        raise


class Interactions:
    """
    Wait, act, and probe against one Playwright page.

    Usage:
        ui = Interactions(page, config)
        await ui.click(Locator.css("[data-testid='login-submit-button']"))
        assert await ui.is_displayed(Locator.css("header"))
    """

    def __init__(
        self,
        page: Page,
        config: ShopConfig,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.page = page
        self.config = config
        self.poll_interval = poll_interval

    @property
    def explicit_wait(self) -> float:
        return float(self.config.explicit_wait)

    def _timeout(self, timeout: Optional[float]) -> float:
        return self.explicit_wait if timeout is None else float(timeout)

    async def _wait(self, condition, timeout: Optional[float], description: str) -> Any:
        return await wait_until(
            condition,
            timeout=self._timeout(timeout),
            poll_interval=self.poll_interval,
            description=description,
        )

    async def _native_wait(self, wait_call, timeout: Optional[float], description: str) -> Any:
        """
        Run a Playwright wait_for_* call bounded by `timeout` seconds.

        Args:
            wait_call: Callable taking the timeout in milliseconds and returning the wait awaitable
        """
        seconds = self._timeout(timeout)
        try:
            result = await guarded(wait_call(seconds * 1000))
        except PlaywrightTimeoutError as e:
            logger.debug(f"Wait timed out: {description}")
            raise WaitTimeoutError(description, seconds, e) from e
        logger.debug(f"Wait satisfied: {description}")
        return result

    # =========================================================================
    # Resolution
    # =========================================================================

    async def _first(self, locator: Locator) -> Optional[ElementHandle]:
        return await guarded(self.page.query_selector(locator.query))

    async def _visible(self, locator: Locator) -> Optional[ElementHandle]:
        element = await self._first(locator)
        if element is not None and await guarded(element.is_visible()):
            return element
        return None

    async def _clickable(self, locator: Locator) -> Optional[ElementHandle]:
        element = await self._visible(locator)
        if element is not None and await guarded(element.is_enabled()):
            return element
        return None

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_visibility(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the first match is rendered and not hidden."""
        return await self._native_wait(
            lambda ms: self.page.wait_for_selector(locator.query, state="visible", timeout=ms),
            timeout,
            f"visibility of {locator}",
        )

    async def wait_for_clickable(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the first match is visible and enabled."""
        return await self._wait(lambda: self._clickable(locator), timeout, f"{locator} to be clickable")

    async def wait_for_presence(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Wait until the locator matches an element in the DOM, visible or not."""
        return await self._native_wait(
            lambda ms: self.page.wait_for_selector(locator.query, state="attached", timeout=ms),
            timeout,
            f"presence of {locator}",
        )

    async def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        """Wait for document.readyState to report 'complete'."""
        await self._native_wait(
            lambda ms: self.page.wait_for_function(PAGE_COMPLETE_JS, timeout=ms),
            timeout,
            "document ready state 'complete'",
        )

    async def _wait_for_url(self, predicate, timeout: Optional[float], description: str) -> str:
        # Client-side route changes never fire a load event
        await self._native_wait(
            lambda ms: self.page.wait_for_url(predicate, wait_until="commit", timeout=ms),
            timeout,
            description,
        )
        return self.page.url

    async def wait_for_url_change(self, previous_url: str, timeout: Optional[float] = None) -> str:
        """Wait until the current URL differs from `previous_url`."""
        return await self._wait_for_url(lambda url: url != previous_url, timeout, f"URL to change from {previous_url}")

    async def wait_for_url_containing(self, fragment: str, timeout: Optional[float] = None) -> str:
        return await self._wait_for_url(lambda url: fragment in url, timeout, f"URL to contain '{fragment}'")

    async def wait_for_url_not_containing(self, fragment: str, timeout: Optional[float] = None) -> str:
        return await self._wait_for_url(
            lambda url: fragment not in url,
            timeout,
            f"URL to no longer contain '{fragment}'",
        )

    async def wait_for_minimum_elements(
        self,
        locator: Locator,
        minimum: int,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Best-effort readiness probe: wait for at least `minimum` matches.

        A timeout is logged and reported as False, never raised.
        """

        async def _enough() -> bool:
            return len(await guarded(self.page.query_selector_all(locator.query))) >= minimum

        try:
            await self._wait(_enough, timeout, f"at least {minimum} x {locator}")
            return True
        except WaitTimeoutError as e:
            logger.debug(f"{e}")
            return False

    async def wait_for_animations_to_complete(self, timeout: Optional[float] = None) -> bool:
        """Wait until the document reports zero running animations."""
        try:
            await self._native_wait(
                lambda ms: self.page.wait_for_function(NO_ANIMATIONS_JS, timeout=ms),
                timeout,
                "animations to complete",
            )
            return True
        except WaitTimeoutError as e:
            logger.debug(f"{e}")
            return False

    async def wait_for_content_settled(
        self,
        loading: Locator,
        results: Locator,
        empty: Optional[Locator] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Wait until a listing has finished rendering.

        Settled means any one of: no loading skeletons, at least one result,
        or the no-results indicator is present. On timeout a warning is
        logged and False is returned so queries can still run.
        """

        async def _settled() -> Optional[str]:
            if await self.element_count(loading) == 0:
                return "loading finished"
            if await self.element_count(results) > 0:
                return "results rendered"
            if empty is not None and await self.is_element_present(empty):
                return "empty state rendered"
            return None

        try:
            reason = await self._wait(_settled, timeout, "listing content to settle")
            logger.debug(f"Content settled: {reason}")
            return True
        except WaitTimeoutError as e:
            logger.warning(f"Content did not settle: {e}")
            return False

    # =========================================================================
    # Actions
    # =========================================================================

    async def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Click once clickable; one re-resolve if the node goes stale."""

        async def _click_once() -> None:
            element = await self.wait_for_clickable(locator, timeout)
            await guarded(element.click(timeout=self._timeout(timeout) * 1000))

        with allure.step(f"Click: {locator}"):
            await with_stale_retry(_click_once, description=f"click {locator}")
            logger.debug(f"Clicked {locator}")

    async def type(self, locator: Locator, text: str, timeout: Optional[float] = None) -> None:
        """Clear the field, then enter `text` exactly as given."""
        shown = "*" * len(text) if "password" in str(locator).lower() else text
        with allure.step(f"Type into {locator}: {shown!r}"):
            element = await self.wait_for_visibility(locator, timeout)
            await guarded(element.fill(""))
            await guarded(element.fill(text))
            logger.debug(f"Typed {shown!r} into {locator}")

    async def clear(self, locator: Locator, timeout: Optional[float] = None) -> None:
        element = await self.wait_for_visibility(locator, timeout)
        await guarded(element.fill(""))

    async def js_click(self, element: ElementHandle) -> None:
        """Click through the DOM, bypassing overlay and actionability checks."""
        await guarded(element.evaluate("el => el.click()"))

    async def scroll_to_element(self, locator: Locator, timeout: Optional[float] = None) -> ElementHandle:
        """Scroll the first match into the middle of the viewport. Does not wait for the scroll."""
        element = await self.wait_for_presence(locator, timeout)
        await guarded(element.evaluate(SCROLL_INTO_VIEW_JS))
        return element

    async def scroll_to_bottom(self) -> None:
        await guarded(self.page.evaluate(SCROLL_TO_BOTTOM_JS))

    async def press_key(self, key: str) -> None:
        await self.page.keyboard.press(key)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self, url: str) -> None:
        """Open `url` and wait for the document to finish loading."""
        with allure.step(f"Navigate to {url}"):
            await self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.config.page_load_timeout * 1000,
            )
            await self.wait_for_page_load(timeout=self.config.page_load_timeout)
            logger.debug(f"Navigated to: {url}")

    async def refresh(self) -> None:
        await self.page.reload(wait_until="domcontentloaded")
        await self.wait_for_page_load(timeout=self.config.page_load_timeout)

    async def back(self) -> None:
        await self.page.go_back(wait_until="domcontentloaded")
        await self.wait_for_page_load(timeout=self.config.page_load_timeout)

    async def set_viewport(self, width: int, height: int) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})
        logger.debug(f"Viewport set to {width}x{height}")

    def current_url(self) -> str:
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    async def page_source(self) -> str:
        return await self.page.content()

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript function or expression in the page."""
        if arg is None:
            return await guarded(self.page.evaluate(script))
        return await guarded(self.page.evaluate(script, arg))

    async def active_element_info(self) -> Dict[str, str]:
        try:
            return await self.execute_script(ACTIVE_ELEMENT_JS) or {}
        except (PlaywrightError, StaleElementError) as e:
            logger.debug(f"Active element lookup failed: {e}")
            return {}

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        """Visible text of the first match, whitespace-stripped."""
        element = await self.wait_for_visibility(locator, timeout)
        return (await guarded(element.inner_text())).strip()

    async def get_attribute(
        self,
        locator: Locator,
        name: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        element = await self.wait_for_presence(locator, timeout)
        return await guarded(element.get_attribute(name))

    async def elements(self, locator: Locator) -> List[ElementHandle]:
        """All current matches; empty on any driver error."""
        try:
            return await guarded(self.page.query_selector_all(locator.query))
        except (PlaywrightError, StaleElementError) as e:
            logger.debug(f"Lookup of {locator} failed: {e}")
            return []

    async def element_count(self, locator: Locator) -> int:
        return len(await self.elements(locator))

    async def texts(self, locator: Locator) -> List[str]:
        """Stripped inner text of every match, skipping detached nodes."""
        result: List[str] = []
        for element in await self.elements(locator):
            try:
                text = (await guarded(element.inner_text())).strip()
            except (PlaywrightError, StaleElementError) as e:
                logger.debug(f"Skipping unreadable {locator}: {e}")
                continue
            if text:
                result.append(text)
        return result

    # =========================================================================
    # Probes (never raise)
    # =========================================================================

    async def is_displayed(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """
        Whether the first match is visible.

        With a timeout, waits up to that long before answering False.
        """
        try:
            if timeout:
                await self.wait_for_visibility(locator, timeout)
                return True
            return await self._visible(locator) is not None
        except QUERY_ERRORS as e:
            logger.debug(f"{locator} not displayed: {e}")
            return False

    async def is_enabled(self, locator: Locator) -> bool:
        try:
            element = await self._first(locator)
            return element is not None and bool(await guarded(element.is_enabled()))
        except (PlaywrightError, StaleElementError) as e:
            logger.debug(f"{locator} not enabled: {e}")
            return False

    async def is_element_present(self, locator: Locator) -> bool:
        try:
            return await self._first(locator) is not None
        except (PlaywrightError, StaleElementError) as e:
            logger.debug(f"{locator} not present: {e}")
            return False


__all__ = [
    "Interactions",
    "QUERY_ERRORS",
    "STALE_MARKERS",
    "guarded",
    "is_stale_error",
]
