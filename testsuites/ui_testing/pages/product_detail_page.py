"""
================================================================================
Product Detail Page Object (Async / Playwright)
================================================================================

Single product route (/products/{id}): title, price, description, gallery,
stock badge, quantity stepper with running total, add-to-cart, recommended
products, reviews and share controls.

The quantity is a button-driven counter rendered as text, not an input.
After each step the page waits for the rendered value to change instead of
sleeping.

================================================================================
"""

from __future__ import annotations

import re

import allure
from loguru import logger

from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import wait_until
from testsuites.ui_testing.pages.components.header_component import HeaderComponent
from testsuites.ui_testing.pages.price_utils import parse_price


PRICE_TOLERANCE = 0.01


def _testid(value: str, name: str = "") -> Locator:
    return Locator.css(f"[data-testid='{value}']", name or value)


class ProductDetailPage(PageBase):
    """Product detail page object (async)."""

    URL_PATH = "/products/"
    PAGE_TITLE = "Product"

    PRODUCT_TITLE = _testid("product-title")
    PRODUCT_PRICE = _testid("product-price")
    PRODUCT_DESCRIPTION = _testid("product-description")
    PRODUCT_IMAGE = Locator.css("[data-testid='gallery-main-image'] img", "product image")
    ADD_TO_CART_BUTTON = _testid("add-to-cart-button")
    PRODUCT_STOCK = _testid("product-stock-status")
    SUCCESS_MESSAGE = Locator.css("[data-testid='success-message'], .success, [role='alert']", "success message")

    QUANTITY_SELECTOR = _testid("quantity-selector")
    QUANTITY_DECREASE = _testid("quantity-decrease-button")
    QUANTITY_INCREASE = _testid("quantity-increase-button")
    QUANTITY_DISPLAY = Locator.css("[data-testid='quantity-value'], .quantity-value", "quantity value")
    TOTAL_PRICE = Locator.css("[data-testid='total-price'], .total-price", "total price")

    CONTINUE_SHOPPING_BUTTON = Locator.css("[data-testid='continue-shopping'], a[href*='/products']", "continue shopping")
    RECOMMENDED_PRODUCTS = Locator.css("[data-testid^='recommended-'], .recommended-products", "recommended products")
    RECOMMENDED_PRODUCT_LINKS = Locator.css(
        "[data-testid^='recommended-'] a, .recommended-products a", "recommended product links"
    )
    REVIEWS_SECTION = Locator.css("[data-testid='reviews-section'], #reviews, .reviews", "reviews")
    REVIEW_ITEMS = Locator.css("[data-testid^='review-'], .review-item", "review items")
    SHARE_BUTTON = Locator.css("[data-testid='share-button'], button[aria-label*='share']", "share button")
    COPY_LINK_BUTTON = Locator.css("[data-testid='copy-link'], button[aria-label*='copy']", "copy link")
    COPIED_MESSAGE = Locator.css("[data-testid='copied-message'], .copied, [role='status']", "copied message")

    def __init__(self, ui):
        super().__init__(ui)
        self.header = HeaderComponent(ui)

    async def open_product(self, product_id) -> "ProductDetailPage":
        await self.navigate_to(f"/products/{product_id}")
        return self

    @allure.step("Verify product detail page is loaded")
    async def is_page_loaded(self) -> bool:
        try:
            await self.ui.wait_for_page_load()
        except QUERY_ERRORS as e:
            logger.debug(f"Product page did not finish loading: {e}")
            return False
        return await self.ui.is_displayed(self.PRODUCT_TITLE, timeout=self.ui.explicit_wait) and (
            await self.ui.is_displayed(self.PRODUCT_PRICE)
        )

    # =========================================================================
    # Product info
    # =========================================================================

    @allure.step("Get product title")
    async def get_product_title(self) -> str:
        return await self.text_or_empty(self.PRODUCT_TITLE, wait=self.ui.explicit_wait)

    @allure.step("Get product price")
    async def get_product_price(self) -> str:
        return await self.text_or_empty(self.PRODUCT_PRICE, wait=self.ui.explicit_wait)

    async def get_product_price_value(self) -> float:
        return parse_price(await self.get_product_price())

    async def get_product_description(self) -> str:
        return await self.text_or_empty(self.PRODUCT_DESCRIPTION)

    async def is_product_image_displayed(self) -> bool:
        return await self.ui.is_displayed(self.PRODUCT_IMAGE, timeout=self.ui.explicit_wait)

    async def get_product_image_src(self) -> str:
        try:
            return await self.ui.get_attribute(self.PRODUCT_IMAGE, "src", timeout=2) or ""
        except QUERY_ERRORS:
            return ""

    async def get_stock_status(self) -> str:
        return await self.text_or_empty(self.PRODUCT_STOCK)

    @allure.step("Check if product is in stock")
    async def is_in_stock(self) -> bool:
        """Read the stock badge; without one, an enabled add-to-cart button means in stock."""
        stock_text = (await self.get_stock_status()).lower()
        if stock_text:
            logger.debug(f"Stock status text: {stock_text}")
            return "in stock" in stock_text or "available" in stock_text or "out of stock" not in stock_text
        return await self.is_add_to_cart_button_enabled()

    # =========================================================================
    # Cart
    # =========================================================================

    async def is_add_to_cart_button_displayed(self) -> bool:
        return await self.ui.is_displayed(self.ADD_TO_CART_BUTTON)

    async def is_add_to_cart_button_enabled(self) -> bool:
        return await self.ui.is_enabled(self.ADD_TO_CART_BUTTON)

    @allure.step("Click add to cart button")
    async def click_add_to_cart(self) -> None:
        await self.ui.scroll_to_element(self.ADD_TO_CART_BUTTON)
        await self.ui.click(self.ADD_TO_CART_BUTTON)

    @allure.step("Click add to cart and wait for confirmation")
    async def click_add_to_cart_and_wait(self) -> None:
        """Add to cart, then wait for a redirect, a success message, or the button to settle."""
        previous_url = self.current_url()
        await self.click_add_to_cart()

        async def _confirmed() -> bool:
            if self.current_url() != previous_url:
                return True
            if await self.ui.is_displayed(self.SUCCESS_MESSAGE):
                return True
            return await self.ui.is_displayed(self.ADD_TO_CART_BUTTON)

        await wait_until(
            _confirmed,
            timeout=self.ui.explicit_wait,
            poll_interval=self.ui.poll_interval,
            description="add to cart confirmation",
        )
        logger.info("Add to cart action completed")

    @allure.step("Go to cart")
    async def go_to_cart(self) -> None:
        await self.header.click_cart()

    # =========================================================================
    # Quantity
    # =========================================================================

    @allure.step("Get product quantity")
    async def get_quantity(self) -> int:
        """Rendered quantity; 1 when it cannot be read."""
        text = await self.text_or_empty(self.QUANTITY_DISPLAY)
        if text.isdigit():
            return int(text)
        if text:
            logger.warning(f"Could not parse quantity from display: {text}")

        match = re.search(r"\d+", await self.text_or_empty(self.QUANTITY_SELECTOR))
        if match:
            return int(match.group())

        logger.warning("Could not find quantity value, returning default 1")
        return 1

    async def _step_quantity(self, button: Locator) -> int:
        before = await self.get_quantity()
        await self.ui.click(button)

        async def _changed() -> bool:
            return await self.get_quantity() != before

        try:
            await wait_until(_changed, timeout=2, poll_interval=0.1, description="quantity to update")
        except WaitTimeoutError:
            logger.debug(f"Quantity stayed at {before} after clicking {button}")
        return await self.get_quantity()

    @allure.step("Increase product quantity")
    async def increase_quantity(self) -> None:
        if await self.ui.is_displayed(self.QUANTITY_INCREASE):
            before = await self.get_quantity()
            after = await self._step_quantity(self.QUANTITY_INCREASE)
            logger.info(f"Quantity increased: {before} -> {after}")

    @allure.step("Decrease product quantity")
    async def decrease_quantity(self) -> None:
        # Disabled at quantity 1
        if await self.ui.is_displayed(self.QUANTITY_DECREASE) and await self.is_decrease_button_enabled():
            before = await self.get_quantity()
            after = await self._step_quantity(self.QUANTITY_DECREASE)
            logger.info(f"Quantity decreased: {before} -> {after}")

    async def is_decrease_button_enabled(self) -> bool:
        return await self.ui.is_enabled(self.QUANTITY_DECREASE)

    @allure.step("Set product quantity to: {quantity}")
    async def set_quantity(self, quantity: int) -> None:
        """Step the counter up or down to `quantity` (values below 1 are ignored)."""
        current = await self.get_quantity()
        if quantity > current:
            for _ in range(quantity - current):
                await self._step_quantity(self.QUANTITY_INCREASE)
        elif 0 < quantity < current:
            for _ in range(current - quantity):
                await self._step_quantity(self.QUANTITY_DECREASE)
        logger.info(f"Quantity after setting: {await self.get_quantity()}")

    @allure.step("Get total price")
    async def get_total_price(self) -> str:
        total = await self.text_or_empty(self.TOTAL_PRICE)
        return total or await self.get_product_price()

    async def get_total_price_value(self) -> float:
        value = parse_price(await self.get_total_price())
        if value:
            return value
        return await self.get_product_price_value() * await self.get_quantity()

    @allure.step("Verify total price calculation")
    async def is_total_price_calculated_correctly(self) -> bool:
        unit_price = await self.get_product_price_value()
        quantity = await self.get_quantity()
        expected = unit_price * quantity
        actual = await self.get_total_price_value()
        logger.info(f"Total price check - unit: {unit_price}, qty: {quantity}, expected: {expected}, actual: {actual}")
        return abs(actual - expected) < PRICE_TOLERANCE

    # =========================================================================
    # Navigation, recommendations, reviews, share
    # =========================================================================

    @allure.step("Click continue shopping button")
    async def click_continue_shopping(self) -> None:
        if await self.ui.is_displayed(self.CONTINUE_SHOPPING_BUTTON):
            await self.ui.click(self.CONTINUE_SHOPPING_BUTTON)
            await self.ui.wait_for_page_load()

    async def has_recommended_products(self) -> bool:
        return await self.ui.is_displayed(self.RECOMMENDED_PRODUCTS)

    async def get_recommended_products_count(self) -> int:
        if await self.has_recommended_products():
            return await self.ui.element_count(self.RECOMMENDED_PRODUCT_LINKS)
        return 0

    @allure.step("Click recommended product at index: {index}")
    async def click_recommended_product(self, index: int) -> None:
        links = await self.ui.elements(self.RECOMMENDED_PRODUCT_LINKS)
        if 0 <= index < len(links):
            previous_url = self.current_url()
            await self.ui.js_click(links[index])
            await self.ui.wait_for_url_change(previous_url)

    async def has_reviews_section(self) -> bool:
        return await self.ui.is_displayed(self.REVIEWS_SECTION)

    async def get_reviews_count(self) -> int:
        if await self.has_reviews_section():
            return await self.ui.element_count(self.REVIEW_ITEMS)
        return 0

    async def are_reviews_properly_formatted(self) -> bool:
        """Every review has text that names an author ('by') or is longer than 10 chars."""
        for text in await self.ui.texts(self.REVIEW_ITEMS):
            if "by" not in text.lower() and len(text) <= 10:
                return False
        return True

    async def click_share_button(self) -> None:
        if await self.ui.is_displayed(self.SHARE_BUTTON):
            await self.ui.click(self.SHARE_BUTTON)

    async def click_copy_link(self) -> None:
        if await self.ui.is_displayed(self.COPY_LINK_BUTTON):
            await self.ui.click(self.COPY_LINK_BUTTON)

    async def is_copied_message_displayed(self) -> bool:
        return await self.ui.is_displayed(self.COPIED_MESSAGE, timeout=2)


__all__ = ["ProductDetailPage"]
