"""
================================================================================
Search Results Page Object (Async / Playwright)
================================================================================

Search results share the /products grid; this page object reads that grid
as "results" of the last search term.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.async_api import ElementHandle

from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.components.header_component import HeaderComponent


RESULT_NAVIGATION_TIMEOUT = 15


class SearchResultsPage(PageBase):
    """Search results page object (async)."""

    URL_PATH = "/products"
    PAGE_TITLE = "Search"

    RESULTS_CONTAINER = Locator.css("main.flex-1", "results container")
    SEARCH_INPUT = Locator.css("[data-testid='search-products-input']", "products search input")
    RESULT_ITEMS = Locator.css("[data-testid^='product-card-']", "result cards")
    RESULT_TITLE = Locator.css("[data-testid^='product-title-link-'] h3", "result title")
    RESULT_IMAGE_LINK = Locator.css("[data-testid^='product-image-link-']", "result image link")
    SKELETON_LOADER = Locator.css("[data-slot='skeleton']", "skeleton loader")
    NO_RESULTS_MESSAGE = Locator.css("[data-testid='no-results'], .no-results", "no results")

    def __init__(self, ui):
        super().__init__(ui)
        self.header = HeaderComponent(ui)

    @allure.step("Verify search results page is loaded")
    async def is_page_loaded(self) -> bool:
        try:
            await self.ui.wait_for_page_load()
        except QUERY_ERRORS as e:
            logger.debug(f"Search page did not finish loading: {e}")
            return False
        await self.wait_for_results()
        return await self.ui.is_displayed(self.RESULTS_CONTAINER) and await self.ui.is_element_present(
            self.SEARCH_INPUT
        )

    async def wait_for_results(self) -> bool:
        return await self.ui.wait_for_content_settled(
            loading=self.SKELETON_LOADER,
            results=self.RESULT_ITEMS,
            empty=self.NO_RESULTS_MESSAGE,
        )

    @allure.step("Search for: {search_term}")
    async def search_for(self, search_term: str) -> None:
        """Type `search_term` verbatim into the listing search (header search as fallback)."""
        if await self.ui.is_element_present(self.SEARCH_INPUT):
            await self.ui.type(self.SEARCH_INPUT, search_term)
            await self.ui.wait_for_page_load()
            await self.wait_for_results()
        else:
            await self.header.search_product(search_term)

    @allure.step("Check if results are found")
    async def has_results(self) -> bool:
        await self.wait_for_results()
        return await self.get_result_count() > 0

    @allure.step("Check if no results message is displayed")
    async def is_no_results_message_displayed(self) -> bool:
        """The empty-state message is shown, or the grid rendered no cards."""
        if await self.ui.is_element_present(self.NO_RESULTS_MESSAGE):
            return True
        return await self.get_result_count() == 0

    async def get_results(self) -> List[ElementHandle]:
        return await self.ui.elements(self.RESULT_ITEMS)

    @allure.step("Get result count")
    async def get_result_count(self) -> int:
        count = await self.ui.element_count(self.RESULT_ITEMS)
        logger.info(f"Found {count} results in products grid")
        return count

    @allure.step("Get result titles")
    async def get_result_titles(self) -> List[str]:
        """Card titles; a card without a title contributes its whole text."""
        titles: List[str] = []
        for card in await self.get_results():
            try:
                title = await card.query_selector(self.RESULT_TITLE.query)
                titles.append((await (title or card).inner_text()).strip())
            except QUERY_ERRORS as e:
                logger.debug(f"Could not read result title: {e}")
        return titles

    @allure.step("Click on result at index {index}")
    async def click_result(self, index: int) -> None:
        results = await self.get_results()
        if not 0 <= index < len(results):
            logger.warning(f"No result at index {index} (found {len(results)})")
            return

        card = results[index]
        previous_url = self.current_url()
        try:
            await self.ui.scroll_to_element(self.RESULT_ITEMS)
        except QUERY_ERRORS as e:
            logger.debug(f"Could not scroll to results: {e}")

        try:
            link = await card.query_selector(self.RESULT_IMAGE_LINK.query)
            await self.ui.js_click(link if link is not None else card)
        except QUERY_ERRORS as e:
            logger.debug(f"Image link click failed, clicking card: {e}")
            await self.ui.js_click(card)

        try:
            await self.ui.wait_for_url_change(previous_url, timeout=RESULT_NAVIGATION_TIMEOUT)
        except WaitTimeoutError:
            logger.warning(f"URL did not change after click on result index {index}")
        await self.ui.wait_for_page_load()

    async def click_first_result(self) -> None:
        await self.click_result(0)


__all__ = ["SearchResultsPage"]
