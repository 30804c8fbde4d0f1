"""
================================================================================
Header Component (Async / Playwright)
================================================================================

Site header shared by /products, /cart and the information pages:
logo, search, cart icon with item badge, navigation links, theme toggle.

Search lives on the /products listing; header helpers navigate there first
when called from another route.

================================================================================
"""

from __future__ import annotations

import re

import allure
from loguru import logger

from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import Component


class HeaderComponent(Component):
    """Header component (async)."""

    LOGO = Locator.css("[data-testid='logo-link'], a[href='/']", "logo")
    HEADER_SEARCH_INPUT = Locator.css("[data-testid='search-input'], #header-search", "header search input")
    HEADER_SEARCH_BUTTON = Locator.css("[data-testid='search-button']", "header search button")
    PRODUCTS_SEARCH_INPUT = Locator.css("[data-testid='search-products-input']", "products search input")
    CART_ICON = Locator.css(
        "a[href='/cart'], a[href*='/cart'], [data-testid='cart-icon'], button[aria-label*='cart']",
        "cart icon",
    )
    CART_COUNTER = Locator.css(
        "[data-testid='cart-count'], [data-testid='cart-counter'], .cart-count",
        "cart counter",
    )
    NAV_LINKS = Locator.css("nav a, header a", "navigation links")
    HEADER_CONTAINER = Locator.css("header[data-testid='header'], header", "header")
    START_SHOPPING_BUTTON = Locator.css("a[href='/products'], [data-testid='nav-products']", "products link")
    THEME_TOGGLE_BUTTON = Locator.css("button[aria-label='Toggle theme']", "theme toggle")
    HTML_ELEMENT = Locator.tag("html", "html root")

    async def _ensure_on_products(self) -> None:
        if "/products" not in self.current_url():
            await self.ui.navigate(self.config.url_for("/products"))

    async def is_loaded(self) -> bool:
        return await self.ui.is_displayed(self.HEADER_CONTAINER) or await self.ui.is_displayed(
            self.START_SHOPPING_BUTTON
        )

    @allure.step("Verify header is displayed")
    async def is_header_displayed(self) -> bool:
        return await self.ui.is_displayed(self.HEADER_CONTAINER) or await self.ui.is_element_present(
            self.START_SHOPPING_BUTTON
        )

    async def is_logo_displayed(self) -> bool:
        return await self.ui.is_element_present(self.LOGO) or await self.ui.is_element_present(
            self.START_SHOPPING_BUTTON
        )

    @allure.step("Click on logo to go to home page")
    async def click_logo(self) -> None:
        """Click the logo, or open the base URL when there is none."""
        if await self.ui.is_element_present(self.LOGO):
            await self.ui.click(self.LOGO)
        else:
            await self.ui.navigate(self.config.url_for("/"))
        await self.ui.wait_for_page_load()

    # =========================================================================
    # Search
    # =========================================================================

    @allure.step("Search for product: {search_term}")
    async def search_product(self, search_term: str) -> None:
        """
        Search from the products list, falling back to the header search box.

        The term is typed verbatim; the storefront does not trim it either.
        """
        logger.info(f"Searching for: {search_term!r}")
        await self._ensure_on_products()

        if await self.ui.is_element_present(self.PRODUCTS_SEARCH_INPUT):
            await self.ui.type(self.PRODUCTS_SEARCH_INPUT, search_term)
            await self.ui.wait_for_page_load()
            return

        if await self.ui.is_element_present(self.HEADER_SEARCH_INPUT):
            await self.ui.type(self.HEADER_SEARCH_INPUT, search_term)
            if await self.ui.is_element_present(self.HEADER_SEARCH_BUTTON):
                await self.ui.click(self.HEADER_SEARCH_BUTTON)
            await self.ui.wait_for_page_load()
            return

        logger.warning("No search input found on the products page")

    @allure.step("Type in search field: {search_term}")
    async def type_in_search_field(self, search_term: str) -> None:
        """Type without submitting."""
        await self._ensure_on_products()
        if await self.ui.is_element_present(self.PRODUCTS_SEARCH_INPUT):
            await self.ui.type(self.PRODUCTS_SEARCH_INPUT, search_term)
        else:
            await self.ui.type(self.HEADER_SEARCH_INPUT, search_term)

    async def get_search_field_value(self) -> str:
        locator = self.PRODUCTS_SEARCH_INPUT
        if not await self.ui.is_element_present(locator):
            locator = self.HEADER_SEARCH_INPUT
        try:
            return await self.ui.get_attribute(locator, "value", timeout=2) or ""
        except QUERY_ERRORS as e:
            logger.debug(f"Search field value unavailable: {e}")
            return ""

    async def is_search_input_displayed(self) -> bool:
        # Search only exists on the listing; elsewhere there is nothing to check
        if "/products" in self.current_url():
            return await self.ui.is_element_present(self.PRODUCTS_SEARCH_INPUT) or await self.ui.is_element_present(
                self.HEADER_SEARCH_INPUT
            )
        return True

    # =========================================================================
    # Cart
    # =========================================================================

    @allure.step("Click on cart icon")
    async def click_cart(self) -> None:
        """Open the cart through the icon, or directly when the icon is unusable."""
        try:
            if await self.ui.is_element_present(self.CART_ICON):
                await self.ui.click(self.CART_ICON)
            else:
                await self.ui.navigate(self.config.url_for("/cart"))
        except QUERY_ERRORS as e:
            logger.debug(f"Cart icon click failed, navigating directly: {e}")
            await self.ui.navigate(self.config.url_for("/cart"))
        await self.ui.wait_for_page_load()

    async def is_cart_icon_displayed(self) -> bool:
        return await self.ui.is_element_present(self.CART_ICON)

    @allure.step("Get cart item count")
    async def get_cart_item_count(self) -> int:
        """Number shown in the cart badge, 0 when there is no badge."""
        try:
            if await self.ui.is_displayed(self.CART_COUNTER):
                text = await self.ui.get_text(self.CART_COUNTER, timeout=2)
                digits = re.sub(r"[^0-9]", "", text)
                return int(digits) if digits else 0
        except QUERY_ERRORS as e:
            logger.debug(f"Could not get cart count: {e}")
        return 0

    async def get_nav_links_count(self) -> int:
        return await self.ui.element_count(self.NAV_LINKS)

    # =========================================================================
    # Theme
    # =========================================================================

    @allure.step("Verify theme toggle button is displayed")
    async def is_theme_toggle_displayed(self) -> bool:
        return await self.ui.is_element_present(self.THEME_TOGGLE_BUTTON)

    @allure.step("Click theme toggle button")
    async def click_theme_toggle(self) -> None:
        if not await self.ui.is_element_present(self.THEME_TOGGLE_BUTTON):
            logger.warning("Theme toggle button not found")
            return
        await self.ui.click(self.THEME_TOGGLE_BUTTON)
        await self.ui.wait_for_animations_to_complete(timeout=2)

    @allure.step("Get current theme")
    async def get_current_theme(self) -> str:
        """
        Theme applied to the document root.

        Returns:
            "dark" or "light" from the html class or style, "system" when
            neither names one, "unknown" when the root cannot be read
        """
        try:
            html_class = await self.ui.get_attribute(self.HTML_ELEMENT, "class", timeout=2) or ""
            for theme in ("dark", "light"):
                if theme in html_class:
                    return theme

            style = await self.ui.get_attribute(self.HTML_ELEMENT, "style", timeout=2) or ""
            for theme in ("dark", "light"):
                if theme in style:
                    return theme
            return "system"
        except QUERY_ERRORS as e:
            logger.debug(f"Error getting current theme: {e}")
            return "unknown"

    async def get_theme_toggle_aria_label(self) -> str:
        if not await self.ui.is_element_present(self.THEME_TOGGLE_BUTTON):
            return ""
        try:
            return await self.ui.get_attribute(self.THEME_TOGGLE_BUTTON, "aria-label", timeout=2) or ""
        except QUERY_ERRORS:
            return ""

    async def get_html_class(self) -> str:
        try:
            return await self.ui.get_attribute(self.HTML_ELEMENT, "class", timeout=2) or ""
        except QUERY_ERRORS:
            return ""

    async def get_html_style(self) -> str:
        try:
            return await self.ui.get_attribute(self.HTML_ELEMENT, "style", timeout=2) or ""
        except QUERY_ERRORS:
            return ""

    async def get_html_color_scheme(self) -> str:
        try:
            return await self.ui.execute_script(
                "() => getComputedStyle(document.documentElement).colorScheme"
            ) or ""
        except QUERY_ERRORS as e:
            logger.debug(f"Error getting color-scheme: {e}")
            return ""


__all__ = ["HeaderComponent"]
