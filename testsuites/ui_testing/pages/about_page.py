"""
About page (/about): mission/vision/values cards, "why choose us" features,
company statistics and call-to-action buttons.
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.pages.info_page import InfoPage, by_testid


class AboutPage(InfoPage):
    """About page object (async)."""

    URL_PATH = "/about"
    PAGE_TITLE = "About"

    MISSION_CARD = by_testid("mission-card")
    VISION_CARD = by_testid("vision-card")
    VALUES_CARD = by_testid("values-card")

    WHY_CHOOSE_US = (
        by_testid("why-authentic"),
        by_testid("why-support"),
        by_testid("why-competitive"),
        by_testid("why-warranty"),
        by_testid("why-delivery"),
        by_testid("why-returns"),
    )
    STATISTICS = (
        by_testid("stat-customers"),
        by_testid("stat-products"),
        by_testid("stat-cities"),
        by_testid("stat-years"),
    )
    CTA_PRODUCTS = by_testid("cta-products")
    CTA_CONTACT = by_testid("cta-contact")

    LANDMARKS = (MISSION_CARD,)
    CONTENT_KEYWORDS = ("mission", "vision", "values", "music", "colombia")

    async def is_mission_card_displayed(self) -> bool:
        return await self.ui.is_displayed(self.MISSION_CARD)

    async def is_vision_card_displayed(self) -> bool:
        return await self.ui.is_displayed(self.VISION_CARD)

    async def is_values_card_displayed(self) -> bool:
        return await self.ui.is_displayed(self.VALUES_CARD)

    @allure.step("Check if all Why Choose Us features are displayed")
    async def are_all_why_choose_us_features_displayed(self) -> bool:
        return await self.all_displayed(self.WHY_CHOOSE_US)

    @allure.step("Check if statistics are displayed")
    async def are_statistics_displayed(self) -> bool:
        return await self.all_displayed(self.STATISTICS)

    async def are_cta_buttons_displayed(self) -> bool:
        return await self.all_displayed((self.CTA_PRODUCTS, self.CTA_CONTACT))


__all__ = ["AboutPage"]
