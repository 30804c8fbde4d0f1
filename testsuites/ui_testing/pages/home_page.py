"""
================================================================================
Home Page Object (Async / Playwright)
================================================================================

Landing page: hero section plus an animated "Featured Products" grid.

The grid fades in on scroll, so product queries scroll the featured section
into view and wait for animations before counting cards.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.async_api import ElementHandle

from testsuites.ui_testing.framework.exceptions import ElementNotFoundError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.components.footer_component import FooterComponent
from testsuites.ui_testing.pages.components.header_component import HeaderComponent


class HomePage(PageBase):
    """Home page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Music Tech Shop"

    HERO_SECTION = Locator.css("section.relative.overflow-hidden", "hero section")
    FEATURED_PRODUCTS = Locator.css("[data-testid^='product-card-']", "featured product cards")
    MAIN_CONTENT = Locator.css("main.flex-1", "main content")
    FEATURED_SECTION = Locator.xpath(
        "//h2[contains(text(),'Featured Products')]/ancestor::section", "featured section"
    )
    PRODUCT_IMAGE_LINK = Locator.css("[data-testid^='product-image-link-']", "product image link")
    PRODUCT_TITLE_LINK = Locator.css("[data-testid^='product-title-link-']", "product title link")
    PRODUCT_TITLE_TEXT = Locator.css("[data-testid^='product-title-link-'] h3, h3", "product title")

    def __init__(self, ui):
        super().__init__(ui)
        self.header = HeaderComponent(ui)
        self.footer = FooterComponent(ui)

    @allure.step("Verify home page is loaded")
    async def is_page_loaded(self) -> bool:
        try:
            await self.ui.wait_for_page_load()
        except QUERY_ERRORS as e:
            logger.debug(f"Home page did not finish loading: {e}")
            return False
        return await self.ui.is_displayed(self.MAIN_CONTENT) and (
            await self.ui.is_displayed(self.HERO_SECTION) or await self.ui.is_displayed(self.FEATURED_SECTION)
        )

    async def _reveal_featured_section(self) -> None:
        if await self.ui.is_element_present(self.FEATURED_SECTION):
            try:
                await self.ui.scroll_to_element(self.FEATURED_SECTION)
            except QUERY_ERRORS as e:
                logger.debug(f"Could not scroll to featured section: {e}")
            await self.ui.wait_for_animations_to_complete()

    @allure.step("Get featured products")
    async def get_featured_products(self) -> List[ElementHandle]:
        await self._reveal_featured_section()
        try:
            await self.ui.wait_for_visibility(self.FEATURED_PRODUCTS)
        except QUERY_ERRORS:
            logger.warning("Featured products not immediately visible, scrolling to bottom")
            await self.ui.scroll_to_bottom()
            await self.ui.wait_for_minimum_elements(self.FEATURED_PRODUCTS, 1)
        return await self.ui.elements(self.FEATURED_PRODUCTS)

    @allure.step("Get featured products count")
    async def get_featured_products_count(self) -> int:
        await self._reveal_featured_section()
        count = await self.ui.element_count(self.FEATURED_PRODUCTS)
        logger.info(f"Found {count} featured products")
        return count

    @allure.step("Get product names")
    async def get_product_names(self) -> List[str]:
        names: List[str] = []
        for card in await self.get_featured_products():
            try:
                title = await card.query_selector(self.PRODUCT_TITLE_TEXT.query)
                if title is None:
                    continue
                name = (await title.inner_text()).strip()
            except QUERY_ERRORS as e:
                logger.debug(f"Could not read product title: {e}")
                continue
            if name:
                names.append(name)
        return names

    async def _open_card(self, card: ElementHandle) -> None:
        """Script-click the image link, else the title link, else the card itself."""
        for link in (self.PRODUCT_IMAGE_LINK, self.PRODUCT_TITLE_LINK):
            try:
                target = await card.query_selector(link.query)
                if target is not None:
                    await self.ui.js_click(target)
                    return
            except QUERY_ERRORS as e:
                logger.debug(f"Script click on {link} failed: {e}")
        await self.ui.js_click(card)

    @allure.step("Click on product at index: {index}")
    async def click_product_by_index(self, index: int) -> None:
        """
        Open the product detail page of the index-th featured card.

        Raises:
            IndexError: If index is outside the featured grid
        """
        products = await self.get_featured_products()
        if not 0 <= index < len(products):
            raise IndexError(f"Product index {index} is out of bounds. Total products: {len(products)}")

        previous_url = self.current_url()
        try:
            await self.ui.scroll_to_element(self.FEATURED_PRODUCTS)
        except QUERY_ERRORS as e:
            logger.debug(f"Could not scroll to products: {e}")

        await self._open_card(products[index])
        await self.ui.wait_for_page_load()
        await self.ui.wait_for_url_change(previous_url)
        logger.info(f"Opened product {index}: {self.current_url()}")

    @allure.step("Click on first product")
    async def click_first_product(self) -> None:
        if not await self.get_featured_products():
            raise ElementNotFoundError("No featured products on the home page")
        await self.click_product_by_index(0)

    async def search_product(self, search_term: str) -> None:
        await self.header.search_product(search_term)

    async def get_cart_item_count(self) -> int:
        return await self.header.get_cart_item_count()


__all__ = ["HomePage"]
