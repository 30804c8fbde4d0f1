"""
================================================================================
Add To Cart UI Tests (Async / Playwright)
================================================================================

Adding products from the detail page and verifying them in the cart.

================================================================================
"""

from typing import Awaitable, Callable

import allure
import pytest

from testsuites.ui_testing.pages import CartPage, LoginPage, ProductDetailPage

pytestmark = [pytest.mark.e2e, pytest.mark.ui, pytest.mark.cart]

AddProduct = Callable[[int], Awaitable[str]]
OpenCart = Callable[[], Awaitable[CartPage]]


@allure.epic("Music Tech Shop E2E Tests")
@allure.feature("Shopping Cart")
class TestAddToCart:
    """Add-to-cart test suite (async)."""

    @allure.story("Add Product")
    @allure.title("Add to cart button is shown and enabled on the detail page")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_add_to_cart_button_available(self, home_page, product_detail_page: ProductDetailPage):
        await home_page.click_first_product()

        assert await product_detail_page.is_page_loaded()
        assert await product_detail_page.is_add_to_cart_button_displayed()
        assert await product_detail_page.is_add_to_cart_button_enabled()

    @allure.story("Add Product")
    @allure.title("Added product appears in the cart")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_add_single_product(
        self,
        logged_in_customer: LoginPage,
        add_product_to_cart: AddProduct,
        open_cart: OpenCart,
    ):
        with allure.step("Add the first featured product"):
            title = await add_product_to_cart(0)

        with allure.step("Open cart"):
            cart = await open_cart()

        with allure.step("Verify cart contents"):
            assert await cart.is_cart_loaded_with_items()
            names = await cart.get_item_names()
            assert any(title.lower() in name.lower() or name.lower() in title.lower() for name in names), (
                f"{title!r} not found in cart items {names}"
            )

    @allure.story("Add Product")
    @allure.title("Cart total is shown in dollars after adding a product")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_cart_total_after_add(self, cart_with_product: CartPage):
        total = await cart_with_product.get_total()

        assert "$" in total
        assert await cart_with_product.get_total_value() > 0

    @allure.story("Add Product")
    @allure.title("Two different products give two cart rows")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_add_two_products(
        self,
        logged_in_customer: LoginPage,
        add_product_to_cart: AddProduct,
        open_cart: OpenCart,
    ):
        await add_product_to_cart(0)
        await add_product_to_cart(1)
        cart = await open_cart()

        assert await cart.get_cart_item_count() >= 2

    @allure.story("Quantity")
    @allure.title("Detail page total follows the selected quantity")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_detail_quantity_total(self, home_page, product_detail_page: ProductDetailPage):
        await home_page.click_first_product()

        with allure.step("Default quantity is one"):
            assert await product_detail_page.get_quantity() == 1

        with allure.step("Increase to two and check total"):
            await product_detail_page.increase_quantity()
            assert await product_detail_page.get_quantity() == 2
            assert await product_detail_page.is_total_price_calculated_correctly()
