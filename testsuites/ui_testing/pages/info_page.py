"""
================================================================================
Information Page Base (Async / Playwright)
================================================================================

Shared behaviour of the static information pages (about, shipping, returns,
terms). Each subclass names its route, a few landmark locators and the
keywords its body copy is expected to contain.

A page counts as loaded when the URL contains its route and any landmark is
visible.

================================================================================
"""

from __future__ import annotations

from typing import Sequence, Tuple

import allure
from loguru import logger

from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import wait_until


def by_testid(value: str) -> Locator:
    return Locator.css(f"[data-testid='{value}']", value)


class InfoPage(PageBase):
    """Base class for the static information pages."""

    PAGE_HEADING = Locator.tag("h1", "page heading")
    PAGE_CONTENT = Locator.tag("main", "page content")

    # Any one visible landmark marks the page as loaded
    LANDMARKS: Tuple[Locator, ...] = ()
    CONTENT_KEYWORDS: Tuple[str, ...] = ()

    async def is_page_loaded(self) -> bool:
        with allure.step(f"Verify {self.URL_PATH} page is loaded"):
            try:
                await self.ui.wait_for_page_load()
            except QUERY_ERRORS as e:
                logger.debug(f"{self.URL_PATH} did not finish loading: {e}")
                return False

            current_url = self.current_url()
            if self.URL_PATH not in current_url:
                logger.warning(f"URL does not contain {self.URL_PATH}: {current_url}")
                return False

            async def _visible_landmark():
                for landmark in (*self.LANDMARKS, self.PAGE_HEADING, self.PAGE_CONTENT):
                    if await self.ui.is_displayed(landmark):
                        return landmark
                return None

            try:
                landmark = await wait_until(
                    _visible_landmark,
                    timeout=self.ui.explicit_wait,
                    poll_interval=self.ui.poll_interval,
                    description=f"{self.URL_PATH} landmarks",
                )
            except WaitTimeoutError:
                return False
            logger.info(f"{self.URL_PATH} page loaded ({landmark} visible)")
            return True

    async def get_page_heading(self) -> str:
        return await self.text_or_empty(self.PAGE_HEADING, wait=self.ui.explicit_wait)

    async def all_displayed(self, locators: Sequence[Locator]) -> bool:
        for locator in locators:
            if not await self.ui.is_displayed(locator):
                logger.debug(f"{locator} not displayed on {self.URL_PATH}")
                return False
        return True

    async def has_expected_content(self) -> bool:
        """Body text mentions at least one of CONTENT_KEYWORDS (case-insensitive)."""
        content = (await self.text_or_empty(self.PAGE_CONTENT, wait=self.ui.explicit_wait)).lower()
        return any(keyword in content for keyword in self.CONTENT_KEYWORDS)


__all__ = ["InfoPage", "by_testid"]
