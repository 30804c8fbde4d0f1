"""
================================================================================
Base Page Object
================================================================================

Foundation classes for the Page Object Model.

Page objects do not inherit interaction logic. Each one holds an
`Interactions` value (`self.ui`) and the resolved `ShopConfig`, and adds
named locators plus business-level methods on top.

Method contract for every page object:
    - Queries return a sentinel (False, "", 0, []) instead of raising
    - Actions may raise (WaitTimeoutError, IndexError, PagePostconditionError)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

import allure
from loguru import logger

from .config import ShopConfig
from .interactions import QUERY_ERRORS, Interactions
from .locators import Locator


class Component:
    """A fragment of UI (header, footer) bound to an Interactions value."""

    def __init__(self, ui: Interactions):
        self.ui = ui
        self.config: ShopConfig = ui.config

    def current_url(self) -> str:
        return self.ui.current_url()

    def current_path(self) -> str:
        return urlparse(self.ui.current_url()).path or "/"

    async def text_or_empty(self, locator: Locator, wait: Optional[float] = None) -> str:
        """
        Visible text of `locator`, or '' when it is absent or unreadable.

        Args:
            locator: Element to read
            wait: Seconds to wait for visibility first (no wait by default)
        """
        try:
            if await self.ui.is_displayed(locator, timeout=wait):
                return await self.ui.get_text(locator, timeout=2)
        except QUERY_ERRORS as e:
            logger.debug(f"{locator} unreadable: {e}")
        return ""


class PageBase(Component):
    """
    Base class for all routed pages.

    Usage:
        class CartPage(PageBase):
            URL_PATH = "/cart"

            async def get_item_count(self) -> int:
                return await self.ui.element_count(self.CART_ITEMS)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    @property
    def url(self) -> str:
        """Full page URL."""
        return self.config.url_for(self.URL_PATH)

    async def open(self):
        """Navigate to this page and wait for the document to load."""
        with allure.step(f"Open {self.URL_PATH}"):
            await self.ui.navigate(self.url)
        return self

    async def navigate_to(self, path: str) -> None:
        await self.ui.navigate(self.config.url_for(path))

    def is_on_path(self, path: str = "") -> bool:
        """Whether the current URL path starts with `path` (this page's by default)."""
        expected = path or self.URL_PATH
        return self.current_path().rstrip("/").startswith(expected.rstrip("/"))

    async def is_page_loaded(self) -> bool:
        return self.is_on_path()


__all__ = [
    "Component",
    "PageBase",
]
