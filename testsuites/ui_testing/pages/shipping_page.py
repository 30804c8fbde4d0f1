"""
Shipping information page (/shipping): delivery calculator, the three
shipping tiers and the FAQ.
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.pages.info_page import InfoPage, by_testid


class ShippingPage(InfoPage):
    """Shipping page object (async)."""

    URL_PATH = "/shipping"
    PAGE_TITLE = "Shipping"

    PAGE_CONTAINER = by_testid("shipping-page")
    PAGE_HEADING = by_testid("shipping-title")

    DELIVERY_CALCULATOR = by_testid("delivery-calculator")
    ZIP_CODE_INPUT = by_testid("zip-code-input")
    SHIPPING_OPTIONS = (
        by_testid("shipping-option-standard"),
        by_testid("shipping-option-express"),
        by_testid("shipping-option-overnight"),
    )
    POPULAR_BADGE = by_testid("popular-badge")
    FAQ_SECTION = by_testid("shipping-faq")

    LANDMARKS = (PAGE_CONTAINER,)
    CONTENT_KEYWORDS = ("shipping", "delivery", "standard", "express", "overnight")

    async def is_delivery_calculator_displayed(self) -> bool:
        return await self.ui.is_displayed(self.DELIVERY_CALCULATOR)

    @allure.step("Check if all shipping options are displayed")
    async def are_all_shipping_options_displayed(self) -> bool:
        return await self.all_displayed(self.SHIPPING_OPTIONS)

    async def is_faq_section_displayed(self) -> bool:
        return await self.ui.is_displayed(self.FAQ_SECTION)

    async def is_popular_badge_displayed(self) -> bool:
        return await self.ui.is_displayed(self.POPULAR_BADGE)

    @allure.step("Enter ZIP code: {zip_code}")
    async def enter_zip_code(self, zip_code: str) -> None:
        await self.ui.type(self.ZIP_CODE_INPUT, zip_code)


__all__ = ["ShippingPage"]
