"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

Shopping cart: item rows (name, quantity stepper, line total, remove button)
and the order summary (subtotal, total, checkout, continue shopping).

Item rows re-render after every quantity change, so row-level operations
re-resolve the row list once when a handle goes stale.

An unauthenticated visit renders the empty cart in place. Should the
storefront ever redirect to /login instead, every query here treats that as
an empty cart.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import ElementHandle

from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS, guarded
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import wait_until, with_stale_retry
from testsuites.ui_testing.pages.price_utils import extract_price, find_dollar_amount, parse_price


SCROLL_CENTER_JS = "el => el.scrollIntoView({block: 'center'})"


class CartPage(PageBase):
    """Cart page object (async)."""

    URL_PATH = "/cart"
    PAGE_TITLE = "Cart"

    CART_ITEMS = Locator.css("[data-testid^='cart-item-'][role='article']", "cart items")
    CART_ITEM_NAME = Locator.css("a[data-testid^='cart-item-product-name']", "item name")
    CART_ITEM_QUANTITY = Locator.css("span[data-testid^='cart-quantity-']", "item quantity")
    CART_ITEM_DECREASE_BUTTON = Locator.css("button[data-testid^='cart-decrease-quantity-']", "decrease quantity")
    CART_ITEM_INCREASE_BUTTON = Locator.css("button[data-testid^='cart-increase-quantity-']", "increase quantity")
    CART_ITEM_TOTAL_PRICE = Locator.css("p[data-testid^='cart-item-total-price-']", "item total")
    CART_ITEM_REMOVE_BUTTON = Locator.css("button[data-testid^='cart-remove-item-']", "remove item")

    CART_SUBTOTAL = Locator.css("div[data-testid='cart-subtotal']", "subtotal")
    CART_TOTAL = Locator.css("div[data-testid='cart-total']", "total")
    CART_TOTAL_LABEL = Locator.css("span[aria-label^='Total']", "total label")
    CHECKOUT_BUTTON = Locator.css("button[data-testid='checkout-button']", "checkout button")
    CONTINUE_SHOPPING_BUTTON = Locator.css("button[data-testid='continue-shopping']", "continue shopping")
    CART_TITLE = Locator.css("h1, h2, h3[data-testid^='cart-title']", "cart title")
    EMPTY_CART_MESSAGE = Locator.css("[data-testid='empty-cart'], [class*='empty-cart']", "empty cart")

    def _redirected_to_login(self) -> bool:
        return "/login" in self.current_url()

    @allure.step("Verify cart page is loaded")
    async def is_page_loaded(self) -> bool:
        try:
            await self.ui.wait_for_page_load()
        except QUERY_ERRORS as e:
            logger.debug(f"Cart page did not finish loading: {e}")
        if "/cart" in self.current_url():
            return True
        return await self.ui.is_displayed(self.CART_ITEMS) or await self.ui.is_displayed(self.EMPTY_CART_MESSAGE)

    @allure.step("Check if cart is empty")
    async def is_cart_empty(self) -> bool:
        if self._redirected_to_login():
            logger.debug("Cart redirected to login, treating as empty")
            return True
        empty_message = await self.ui.is_displayed(self.EMPTY_CART_MESSAGE)
        no_items = await self.get_cart_item_count() == 0
        logger.debug(f"Cart empty: message={empty_message}, no items={no_items}")
        return empty_message or no_items

    @allure.step("Check if cart is loaded with items")
    async def is_cart_loaded_with_items(self) -> bool:
        if self._redirected_to_login():
            return False
        return await self.get_cart_item_count() > 0

    async def get_cart_title(self) -> str:
        try:
            if await self.ui.is_displayed(self.CART_TITLE):
                return await self.ui.get_text(self.CART_TITLE, timeout=2)
        except QUERY_ERRORS as e:
            logger.debug(f"Cart title unreadable: {e}")
        return ""

    # =========================================================================
    # Items
    # =========================================================================

    async def get_cart_items(self) -> List[ElementHandle]:
        return await self.ui.elements(self.CART_ITEMS)

    @allure.step("Get number of items in cart")
    async def get_cart_item_count(self) -> int:
        count = await self.ui.element_count(self.CART_ITEMS)
        logger.info(f"Cart has {count} items")
        return count

    async def _item_child(self, index: int, locator: Locator) -> Optional[ElementHandle]:
        items = await self.get_cart_items()
        if not 0 <= index < len(items):
            return None
        return await guarded(items[index].query_selector(locator.query))

    async def _read_item(self, index: int, locator: Locator) -> Optional[str]:
        async def _attempt() -> Optional[str]:
            element = await self._item_child(index, locator)
            if element is None:
                return None
            return (await guarded(element.inner_text())).strip()

        try:
            return await with_stale_retry(_attempt, description=f"read {locator} of item {index}")
        except QUERY_ERRORS as e:
            logger.debug(f"Could not read {locator} of item {index}: {e}")
            return None

    async def _press_item_button(self, index: int, locator: Locator, script_click: bool = False) -> None:
        async def _attempt() -> bool:
            button = await self._item_child(index, locator)
            if button is None:
                return False
            # Sticky header overlaps the top rows
            await guarded(button.evaluate(SCROLL_CENTER_JS))
            if script_click:
                await self.ui.js_click(button)
            else:
                await guarded(button.click())
            return True

        if await with_stale_retry(_attempt, description=f"{locator} of item {index}"):
            logger.info(f"Clicked {locator} for item at index {index}")
            await self.ui.wait_for_page_load()
        else:
            logger.warning(f"No {locator} for item at index {index}")

    @allure.step("Get item names in cart")
    async def get_item_names(self) -> List[str]:
        names: List[str] = []
        for index in range(await self.get_cart_item_count()):
            name = await self._read_item(index, self.CART_ITEM_NAME)
            if name:
                names.append(name)
        return names

    async def get_item_quantity(self, index: int) -> int:
        text = await self._read_item(index, self.CART_ITEM_QUANTITY)
        try:
            return int(text) if text else 0
        except ValueError:
            logger.debug(f"Unexpected quantity text: {text!r}")
            return 0

    async def get_item_quantities(self) -> List[int]:
        return [await self.get_item_quantity(i) for i in range(await self.get_cart_item_count())]

    async def get_item_total_price(self, index: int) -> str:
        return await self._read_item(index, self.CART_ITEM_TOTAL_PRICE) or "0.00"

    @allure.step("Remove item at index {index}")
    async def remove_item(self, index: int) -> None:
        await self._press_item_button(index, self.CART_ITEM_REMOVE_BUTTON, script_click=True)

    @allure.step("Increase quantity of item {index}")
    async def increase_item_quantity(self, index: int) -> None:
        await self._press_item_button(index, self.CART_ITEM_INCREASE_BUTTON)

    @allure.step("Decrease quantity of item {index}")
    async def decrease_item_quantity(self, index: int) -> None:
        await self._press_item_button(index, self.CART_ITEM_DECREASE_BUTTON)

    @allure.step("Clear all items from cart")
    async def clear_cart(self) -> None:
        """Remove the first row until none are left."""
        remaining = await self.get_cart_item_count()
        while remaining > 0:
            before = remaining
            await self.remove_item(0)

            async def _shrunk() -> bool:
                return await self.get_cart_item_count() < before

            try:
                await wait_until(
                    _shrunk,
                    timeout=self.ui.explicit_wait,
                    poll_interval=self.ui.poll_interval,
                    description="cart to shrink",
                )
            except WaitTimeoutError:
                logger.warning(f"Cart still has {before} items after removing one, giving up")
                return
            remaining = await self.get_cart_item_count()
            logger.debug(f"Items remaining: {remaining}")
        logger.info("Cart cleared successfully")

    # =========================================================================
    # Order summary
    # =========================================================================

    @allure.step("Get cart subtotal")
    async def get_cart_subtotal(self) -> str:
        if await self.is_cart_empty():
            return "0.00"
        try:
            text = await self.ui.get_text(self.CART_SUBTOTAL, timeout=5)
        except QUERY_ERRORS as e:
            logger.debug(f"Subtotal element not found: {e}")
            return "0.00"
        return extract_price(text)

    @allure.step("Get cart total text")
    async def get_total(self) -> str:
        """Total as shown, e.g. '$102.99'; '$0.00' for an empty cart."""
        if await self.is_cart_empty():
            return "$0.00"
        try:
            total = await self.ui.scroll_to_element(self.CART_TOTAL, timeout=5)
            label = await guarded(total.query_selector(self.CART_TOTAL_LABEL.query))
            if label is not None:
                amount = find_dollar_amount(await guarded(label.get_attribute("aria-label")))
                if amount:
                    return amount
                text = (await guarded(label.inner_text())).strip()
                if text:
                    return text

            full_text = (await guarded(total.inner_text())).strip()
            return find_dollar_amount(full_text) or full_text or "$0.00"
        except QUERY_ERRORS as e:
            logger.debug(f"Total element not found: {e}")
            return "$0.00"

    async def get_total_value(self) -> float:
        return parse_price(await self.get_total())

    @allure.step("Check if checkout button is displayed")
    async def is_checkout_button_displayed(self) -> bool:
        try:
            await self.ui.scroll_to_element(self.CHECKOUT_BUTTON, timeout=5)
        except QUERY_ERRORS as e:
            logger.debug(f"Checkout button not found: {e}")
            return False
        return await self.ui.is_displayed(self.CHECKOUT_BUTTON) or await self.ui.is_element_present(
            self.CHECKOUT_BUTTON
        )

    async def is_checkout_button_enabled(self) -> bool:
        return await self.ui.is_enabled(self.CHECKOUT_BUTTON)

    @allure.step("Click continue shopping button")
    async def click_continue_shopping(self) -> None:
        if await self.ui.is_displayed(self.CONTINUE_SHOPPING_BUTTON):
            await self.ui.click(self.CONTINUE_SHOPPING_BUTTON)
        else:
            logger.debug("Continue shopping button not found, navigating to products page")
            await self.ui.navigate(self.config.url_for("/products"))
        await self.ui.wait_for_page_load()


__all__ = ["CartPage"]
