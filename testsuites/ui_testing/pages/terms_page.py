"""
================================================================================
Terms and Conditions Page Object (Async / Playwright)
================================================================================

Legal copy split into ten titled sections plus a "last updated" line.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.pages.info_page import InfoPage, by_testid


class TermsPage(InfoPage):
    """Terms page object (async)."""

    URL_PATH = "/terms"
    PAGE_TITLE = "Terms"

    PAGE_CONTAINER = by_testid("terms-page")
    PAGE_HEADING = Locator.xpath("//h1[contains(text(), 'Terms')]", "terms heading")
    TERMS_SECTION = by_testid("terms-section")

    SECTIONS = {
        "agreement": by_testid("terms-agreement"),
        "use-license": by_testid("terms-use-license"),
        "disclaimer": by_testid("terms-disclaimer"),
        "limitations": by_testid("terms-limitations"),
        "accuracy": by_testid("terms-accuracy"),
        "links": by_testid("terms-links"),
        "modifications": by_testid("terms-modifications"),
        "governing-law": by_testid("terms-governing-law"),
        "returns": by_testid("terms-returns"),
        "accounts": by_testid("terms-accounts"),
    }
    LAST_UPDATED = by_testid("terms-updated")

    LANDMARKS = (PAGE_CONTAINER, TERMS_SECTION)
    CONTENT_KEYWORDS = ("terms", "conditions", "agreement", "license", "colombia")

    async def is_terms_section_displayed(self) -> bool:
        return await self.ui.is_displayed(self.TERMS_SECTION)

    async def is_section_displayed(self, name: str) -> bool:
        """
        Probe one named section.

        Raises:
            KeyError: If `name` is not one of SECTIONS
        """
        return await self.ui.is_displayed(self.SECTIONS[name])

    @allure.step("Check if all terms sections are displayed")
    async def are_all_sections_displayed(self) -> bool:
        return await self.all_displayed(tuple(self.SECTIONS.values()))

    async def is_last_updated_displayed(self) -> bool:
        return await self.ui.is_displayed(self.LAST_UPDATED)

    @allure.step("Get last updated date")
    async def get_last_updated_date(self) -> str:
        return await self.text_or_empty(self.LAST_UPDATED)


__all__ = ["TermsPage"]
