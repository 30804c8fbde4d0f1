"""
================================================================================
Products Listing Page Object (Async / Playwright)
================================================================================

Product grid at /products with search, category filter, sort and pagination.

Filters live in the query string (`category`, `sort`, `page`). Every filter
operation reads the current filters from the URL, changes one field and
navigates to the rebuilt URL, so setting one filter keeps the others and the
order in which filters are applied does not matter.

The grid renders skeleton placeholders first; every navigation waits for the
content to settle (no skeletons, some cards, or the no-results block).

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import allure
from loguru import logger
from playwright.async_api import ElementHandle

from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.components.header_component import HeaderComponent
from testsuites.ui_testing.pages.price_utils import parse_price


CONTENT_SETTLE_TIMEOUT = 30
PRODUCT_NAVIGATION_TIMEOUT = 15


@dataclass(frozen=True)
class ListingFilters:
    """Query-string state of the product listing."""

    category: str = ""
    sort: str = ""
    page: int = 1

    @classmethod
    def from_url(cls, url: str) -> "ListingFilters":
        params = parse_qs(urlparse(url).query)

        def _first(name: str) -> str:
            values = params.get(name)
            return values[0].strip() if values else ""

        page_text = _first("page")
        page = int(page_text) if page_text.isdigit() and int(page_text) > 0 else 1
        return cls(category=_first("category"), sort=_first("sort"), page=page)

    def with_category(self, category: Optional[str]) -> "ListingFilters":
        return replace(self, category=category or "")

    def with_sort(self, sort: Optional[str]) -> "ListingFilters":
        return replace(self, sort=sort or "")

    def with_page(self, page: Optional[int]) -> "ListingFilters":
        return replace(self, page=page if page and page > 0 else 1)

    def query_string(self) -> str:
        """'category=..&sort=..&page=..' with empty fields and page 1 left out."""
        params = []
        if self.category:
            params.append(("category", self.category))
        if self.sort:
            params.append(("sort", self.sort))
        if self.page > 1:
            params.append(("page", str(self.page)))
        return urlencode(params)

    def apply_to(self, url: str) -> str:
        """`url` without its query string, plus these filters."""
        base = url.split("?", 1)[0].split("#", 1)[0]
        query = self.query_string()
        return f"{base}?{query}" if query else base


class ProductsPage(PageBase):
    """Products listing page object (async)."""

    URL_PATH = "/products"
    PAGE_TITLE = "Products"

    MAIN_CONTENT = Locator.css("main.flex-1", "main content")
    SEARCH_INPUT = Locator.css("[data-testid='search-products-input']", "products search input")
    PRODUCT_CARDS = Locator.css("[data-testid^='product-card-']", "product cards")
    PRODUCT_TITLE = Locator.css("[data-testid^='product-title-link-'] h3", "product title")
    PRODUCT_PRICE = Locator.css("[data-testid^='product-price-']", "product price")
    PRODUCT_IMAGE_LINK = Locator.css("[data-testid^='product-image-link-']", "product image link")
    SKELETON_LOADER = Locator.css("[data-slot='skeleton']", "skeleton loader")
    PAGINATION_CURRENT = Locator.css("[data-testid='pagination-current'], [aria-current='page']", "current page")
    NO_RESULTS_MESSAGE = Locator.css("[data-testid='no-results'], .no-results", "no results")

    def __init__(self, ui):
        super().__init__(ui)
        self.header = HeaderComponent(ui)

    @allure.step("Verify products page is loaded")
    async def is_page_loaded(self) -> bool:
        try:
            await self.ui.wait_for_page_load()
        except QUERY_ERRORS as e:
            logger.debug(f"Products page did not finish loading: {e}")
            return False
        await self.wait_for_content_to_load()
        return await self.ui.is_displayed(self.MAIN_CONTENT) and (
            await self.has_products() or await self.is_no_results_displayed()
        )

    @allure.step("Wait for products to load")
    async def wait_for_content_to_load(self) -> bool:
        return await self.ui.wait_for_content_settled(
            loading=self.SKELETON_LOADER,
            results=self.PRODUCT_CARDS,
            empty=self.NO_RESULTS_MESSAGE,
            timeout=CONTENT_SETTLE_TIMEOUT,
        )

    async def _reload_with(self, filters: ListingFilters) -> None:
        target = filters.apply_to(self.current_url())
        logger.debug(f"Loading listing: {target}")
        await self.ui.navigate(target)
        await self.wait_for_content_to_load()

    # =========================================================================
    # Search and filters
    # =========================================================================

    @allure.step("Search for products: {search_term}")
    async def search_products(self, search_term: str) -> None:
        logger.info(f"Searching for products: {search_term}")
        if await self.ui.is_element_present(self.SEARCH_INPUT):
            await self.ui.type(self.SEARCH_INPUT, search_term)
            await self.ui.wait_for_page_load()
            await self.wait_for_content_to_load()
        else:
            await self.header.search_product(search_term)

    def get_active_filters(self) -> ListingFilters:
        return ListingFilters.from_url(self.current_url())

    @allure.step("Filter by category: {category}")
    async def filter_by_category(self, category: str) -> None:
        logger.info(f"Filtering by category: {category}")
        await self._reload_with(self.get_active_filters().with_category(category))

    @allure.step("Clear category filter")
    async def clear_category_filter(self) -> None:
        await self._reload_with(self.get_active_filters().with_category(""))

    @allure.step("Sort by: {sort_option}")
    async def sort_by(self, sort_option: str) -> None:
        logger.info(f"Sorting products by: {sort_option}")
        await self._reload_with(self.get_active_filters().with_sort(sort_option))

    @allure.step("Navigate to page: {page_number}")
    async def go_to_page(self, page_number: int) -> None:
        logger.info(f"Navigating to page: {page_number}")
        await self._reload_with(self.get_active_filters().with_page(page_number))

    @allure.step("Apply filters - category: {category}, sort: {sort}, page: {page}")
    async def apply_filters(
        self,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
    ) -> None:
        """Replace all filters at once; omitted ones are cleared."""
        await self._reload_with(ListingFilters().with_category(category).with_sort(sort).with_page(page))

    @allure.step("Reset all filters")
    async def reset_all_filters(self) -> None:
        await self._reload_with(ListingFilters())

    def get_active_category_filter(self) -> str:
        return self.get_active_filters().category

    def is_category_filter_active(self, category: str) -> bool:
        return self.get_active_category_filter().lower() == category.lower()

    def get_current_sort_option(self) -> str:
        return self.get_active_filters().sort

    async def get_current_page_number(self) -> int:
        """Page from the URL, else from the pagination widget, else 1."""
        if "page=" in self.current_url():
            return self.get_active_filters().page
        digits = re.sub(r"\D", "", await self.text_or_empty(self.PAGINATION_CURRENT))
        return int(digits) if digits else 1

    # =========================================================================
    # Product grid
    # =========================================================================

    async def has_products(self) -> bool:
        return await self.get_product_count() > 0

    @allure.step("Get product count")
    async def get_product_count(self) -> int:
        count = await self.ui.element_count(self.PRODUCT_CARDS)
        logger.info(f"Found {count} products in grid")
        return count

    async def get_product_cards(self) -> List[ElementHandle]:
        return await self.ui.elements(self.PRODUCT_CARDS)

    async def _card_texts(self, locator: Locator) -> List[str]:
        texts: List[str] = []
        for card in await self.get_product_cards():
            try:
                element = await card.query_selector(locator.query)
                text = (await element.inner_text()).strip() if element is not None else ""
            except QUERY_ERRORS as e:
                logger.debug(f"Could not read {locator}: {e}")
                continue
            if text:
                texts.append(text)
        return texts

    @allure.step("Get all product titles")
    async def get_product_titles(self) -> List[str]:
        return await self._card_texts(self.PRODUCT_TITLE)

    @allure.step("Get all product prices")
    async def get_product_prices(self) -> List[str]:
        return await self._card_texts(self.PRODUCT_PRICE)

    async def get_product_prices_as_numbers(self) -> List[float]:
        return [price for price in map(parse_price, await self.get_product_prices()) if price > 0]

    async def get_product_title_at_index(self, index: int) -> str:
        titles = await self.get_product_titles()
        return titles[index] if 0 <= index < len(titles) else ""

    @allure.step("Click on product at index: {index}")
    async def click_product_by_index(self, index: int) -> None:
        """
        Open the index-th card's detail page.

        Raises:
            IndexError: If index is outside the grid
        """
        products = await self.get_product_cards()
        if not 0 <= index < len(products):
            raise IndexError(f"Product index {index} is out of bounds. Total products: {len(products)}")

        product = products[index]
        previous_url = self.current_url()
        try:
            await self.ui.scroll_to_element(self.PRODUCT_CARDS)
        except QUERY_ERRORS as e:
            logger.debug(f"Could not scroll to products: {e}")

        try:
            image_link = await product.query_selector(self.PRODUCT_IMAGE_LINK.query)
            await self.ui.js_click(image_link if image_link is not None else product)
        except QUERY_ERRORS as e:
            logger.debug(f"Image link click failed, clicking card: {e}")
            await self.ui.js_click(product)

        try:
            await self.ui.wait_for_url_change(previous_url, timeout=PRODUCT_NAVIGATION_TIMEOUT)
        except WaitTimeoutError:
            logger.warning(f"URL did not change after click on product index {index}")
        await self.ui.wait_for_page_load()

    @allure.step("Click on first product")
    async def click_first_product(self) -> None:
        await self.click_product_by_index(0)

    @allure.step("Check if no results message is displayed")
    async def is_no_results_displayed(self) -> bool:
        return await self.ui.is_element_present(self.NO_RESULTS_MESSAGE) or await self.get_product_count() == 0


__all__ = ["ListingFilters", "ProductsPage"]
