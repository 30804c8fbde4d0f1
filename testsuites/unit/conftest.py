"""
Offline doubles for the UI framework unit tests.

FakePage and FakeElement implement the slice of the Playwright async API the
framework touches, so waits, probes and page objects run without a browser.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config import ShopConfig
from testsuites.ui_testing.framework.interactions import (
    ACTIVE_ELEMENT_JS,
    NO_ANIMATIONS_JS,
    PAGE_COMPLETE_JS,
    Interactions,
)
from testsuites.ui_testing.framework.locators import Locator


STALE_MESSAGE = "Element is not attached to the DOM"
UNIT_POLL_INTERVAL = 0.01
# Visibility re-checks a single wait_for_selector call makes before timing out
SELECTOR_WAIT_ROUNDS = 10


def stale_error() -> PlaywrightError:
    return PlaywrightError(STALE_MESSAGE)


def timeout_error(timeout: Optional[float]) -> PlaywrightTimeoutError:
    return PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")


class FakeElement:
    """
    Element handle double.

    Args:
        visible_after: Number of visibility checks answered False first
        stale_times: Number of actions that fail as detached before succeeding
        children: query string -> FakeElement for query_selector
    """

    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        enabled: bool = True,
        attributes: Optional[Dict[str, str]] = None,
        visible_after: int = 0,
        stale_times: int = 0,
        children: Optional[Dict[str, "FakeElement"]] = None,
    ):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.attributes = dict(attributes or {})
        self.visible_after = visible_after
        self.stale_times = stale_times
        self.children = dict(children or {})
        self.value = ""
        self.fills: List[str] = []
        self.clicks = 0
        self.scripts: List[str] = []

    def _maybe_stale(self) -> None:
        if self.stale_times > 0:
            self.stale_times -= 1
            raise stale_error()

    async def is_visible(self) -> bool:
        if self.visible_after > 0:
            self.visible_after -= 1
            return False
        return self.visible

    async def is_enabled(self) -> bool:
        return self.enabled

    async def click(self, timeout: Optional[float] = None) -> None:
        self._maybe_stale()
        self.clicks += 1

    async def fill(self, text: str) -> None:
        self._maybe_stale()
        self.value = text
        self.fills.append(text)

    async def inner_text(self) -> str:
        self._maybe_stale()
        return self.text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self._maybe_stale()
        self.scripts.append(script)
        if "click()" in script:
            self.clicks += 1
        return None

    async def query_selector(self, query: str) -> Optional["FakeElement"]:
        return self.children.get(query)


class FakePage:
    """Page double keyed by Locator.query strings."""

    def __init__(self, url: str = "https://shop.test/"):
        self.url = url
        self.elements: Dict[str, List[FakeElement]] = {}
        self.ready_state = "complete"
        self.animations_idle = True
        self.active_element: Dict[str, str] = {}
        self.failure: Optional[Exception] = None
        self.viewport: Optional[Dict[str, int]] = None
        self.visited: List[str] = []
        self.page_title = "Music Tech Shop"
        self.html = "<html><body>shop</body></html>"
        self.screenshots: List[str] = []
        self.closed = False
        self.selector_waits: List[Tuple[str, str, Optional[float]]] = []

    def add(self, locator: Locator, *elements: FakeElement) -> FakeElement:
        self.elements.setdefault(locator.query, []).extend(elements)
        return elements[0]

    def remove(self, locator: Locator) -> None:
        self.elements.pop(locator.query, None)

    def _raise_failure(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def query_selector(self, query: str) -> Optional[FakeElement]:
        self._raise_failure()
        matches = self.elements.get(query) or []
        return matches[0] if matches else None

    async def query_selector_all(self, query: str) -> List[FakeElement]:
        self._raise_failure()
        return list(self.elements.get(query, []))

    def _script_result(self, script: str) -> Any:
        if script == PAGE_COMPLETE_JS:
            return self.ready_state == "complete"
        if script == NO_ANIMATIONS_JS:
            return self.animations_idle
        if script == ACTIVE_ELEMENT_JS:
            return self.active_element
        return None

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self._raise_failure()
        return self._script_result(script)

    async def wait_for_selector(
        self,
        query: str,
        state: str = "visible",
        timeout: Optional[float] = None,
    ) -> FakeElement:
        self._raise_failure()
        self.selector_waits.append((query, state, timeout))
        for _ in range(SELECTOR_WAIT_ROUNDS):
            element = await self.query_selector(query)
            if element is None:
                continue
            if state == "attached" or await element.is_visible():
                return element
        raise timeout_error(timeout)

    async def wait_for_function(self, expression: str, timeout: Optional[float] = None) -> bool:
        self._raise_failure()
        if self._script_result(expression):
            return True
        raise timeout_error(timeout)

    async def wait_for_url(self, url: Any, wait_until: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self._raise_failure()
        matched = url(self.url) if callable(url) else url == self.url
        if not matched:
            raise timeout_error(timeout)

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.visited.append(url)
        self.url = url

    async def reload(self, wait_until: Optional[str] = None) -> None:
        self.visited.append(self.url)

    async def go_back(self, wait_until: Optional[str] = None) -> None:
        if len(self.visited) > 1:
            self.visited.pop()
            self.url = self.visited[-1]

    async def set_viewport_size(self, size: Dict[str, int]) -> None:
        self.viewport = size

    async def title(self) -> str:
        return self.page_title

    async def content(self) -> str:
        self._raise_failure()
        return self.html

    async def screenshot(self, path: str, full_page: bool = False) -> None:
        self._raise_failure()
        Path(path).write_bytes(b"\x89PNG")
        self.screenshots.append(path)

    def is_closed(self) -> bool:
        return self.closed


@pytest.fixture
def unit_config(tmp_path) -> ShopConfig:
    return ShopConfig(
        base_url="https://shop.test",
        explicit_wait=1,
        page_load_timeout=1,
        artifacts_dir=str(tmp_path / "artifacts"),
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_ui(fake_page: FakePage, unit_config: ShopConfig) -> Interactions:
    return Interactions(fake_page, unit_config, poll_interval=UNIT_POLL_INTERVAL)


@pytest.fixture
def make_element():
    """The FakeElement class, for building elements inside a test."""
    return FakeElement
