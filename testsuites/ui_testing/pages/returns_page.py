"""
Returns and warranty page (/returns).
"""

from __future__ import annotations

from testsuites.ui_testing.pages.info_page import InfoPage, by_testid


class ReturnsPage(InfoPage):
    """Returns page object (async)."""

    URL_PATH = "/returns"
    PAGE_TITLE = "Returns"

    PAGE_CONTAINER = by_testid("returns-page")
    PAGE_HEADING = by_testid("returns-title")

    RETURN_POLICY_CARD = by_testid("return-policy-card")
    RETURN_STEPS = by_testid("return-steps")
    WARRANTY_OPTIONS = by_testid("warranty-options")
    DHL_LOCATIONS = by_testid("dhl-locations")
    RETURN_CONDITIONS = by_testid("return-conditions")
    VIEW_ORDERS_BUTTON = by_testid("view-orders-button")
    CONTACT_SUPPORT_BUTTON = by_testid("contact-support-button")

    LANDMARKS = (PAGE_CONTAINER,)
    CONTENT_KEYWORDS = ("return", "warranty", "refund", "30", "dhl")

    async def is_return_policy_card_displayed(self) -> bool:
        return await self.ui.is_displayed(self.RETURN_POLICY_CARD)

    async def are_return_steps_displayed(self) -> bool:
        return await self.ui.is_displayed(self.RETURN_STEPS)

    async def are_warranty_options_displayed(self) -> bool:
        return await self.ui.is_displayed(self.WARRANTY_OPTIONS)

    async def are_dhl_locations_displayed(self) -> bool:
        return await self.ui.is_displayed(self.DHL_LOCATIONS)

    async def are_return_conditions_displayed(self) -> bool:
        return await self.ui.is_displayed(self.RETURN_CONDITIONS)

    async def are_help_buttons_displayed(self) -> bool:
        return await self.all_displayed((self.VIEW_ORDERS_BUTTON, self.CONTACT_SUPPORT_BUTTON))


__all__ = ["ReturnsPage"]
