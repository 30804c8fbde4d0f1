"""
================================================================================
Product Detail UI Tests (Async / Playwright)
================================================================================

Product information, quantity selector, price total and page extras.

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.pages import HomePage, ProductDetailPage

pytestmark = [pytest.mark.e2e, pytest.mark.ui, pytest.mark.catalog]


@pytest.fixture
async def opened_product(home_page: HomePage, product_detail_page: ProductDetailPage) -> ProductDetailPage:
    await home_page.click_first_product()
    assert await product_detail_page.is_page_loaded(), "Product detail page should load"
    return product_detail_page


@allure.epic("Music Tech Shop E2E Tests")
@allure.feature("Product Detail")
class TestProductDetail:
    """Product detail page test suite (async)."""

    @allure.story("Product Info")
    @allure.title("Title, price and image are shown")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_product_info_displayed(self, opened_product: ProductDetailPage):
        assert await opened_product.get_product_title()
        assert await opened_product.get_product_price_value() > 0
        assert await opened_product.is_product_image_displayed()

    @allure.story("Product Info")
    @allure.title("Image source is set")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_product_image_src(self, opened_product: ProductDetailPage):
        assert await opened_product.get_product_image_src()

    @allure.story("Product Info")
    @allure.title("Product URL carries the product route")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_product_url(self, opened_product: ProductDetailPage):
        assert opened_product.is_on_path("/products/")

    @allure.story("Stock")
    @allure.title("Featured product is in stock and purchasable")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_in_stock(self, opened_product: ProductDetailPage):
        assert await opened_product.is_in_stock()
        assert await opened_product.is_add_to_cart_button_enabled()

    @allure.story("Quantity")
    @allure.title("Quantity starts at one and decrease is blocked there")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_quantity_lower_bound(self, opened_product: ProductDetailPage):
        assert await opened_product.get_quantity() == 1

        await opened_product.decrease_quantity()

        assert await opened_product.get_quantity() == 1

    @allure.story("Quantity")
    @allure.title("Quantity can be set to three and the total follows")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_set_quantity(self, opened_product: ProductDetailPage):
        await opened_product.set_quantity(3)

        assert await opened_product.get_quantity() == 3
        assert await opened_product.is_total_price_calculated_correctly()

    @allure.story("Quantity")
    @allure.title("Increase then decrease returns to quantity one")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_quantity_round_trip(self, opened_product: ProductDetailPage):
        await opened_product.increase_quantity()
        assert await opened_product.is_decrease_button_enabled()

        await opened_product.decrease_quantity()

        assert await opened_product.get_quantity() == 1

    @allure.story("Navigation")
    @allure.title("Continue shopping leaves the detail page")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_continue_shopping(self, opened_product: ProductDetailPage):
        detail_url = opened_product.current_url()

        await opened_product.click_continue_shopping()

        assert opened_product.current_url() != detail_url

    @allure.story("Extras")
    @allure.title("Reviews, when present, are readable")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_reviews_formatted(self, opened_product: ProductDetailPage):
        if not await opened_product.has_reviews_section():
            pytest.skip("Product has no reviews section")

        assert await opened_product.get_reviews_count() >= 0
        assert await opened_product.are_reviews_properly_formatted()

    @allure.story("Extras")
    @allure.title("Recommended product opens another detail page")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_recommended_products(self, opened_product: ProductDetailPage):
        if not await opened_product.has_recommended_products():
            pytest.skip("Product has no recommendations")

        assert await opened_product.get_recommended_products_count() > 0
        detail_url = opened_product.current_url()

        await opened_product.click_recommended_product(0)

        assert opened_product.current_url() != detail_url

    @allure.story("Direct Access")
    @allure.title("Product 1 opens by URL")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    @pytest.mark.asyncio
    async def test_open_product_by_id(self, product_detail_page: ProductDetailPage):
        await product_detail_page.open_product(1)

        assert await product_detail_page.is_page_loaded()
