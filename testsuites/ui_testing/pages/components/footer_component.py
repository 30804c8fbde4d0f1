"""
================================================================================
Footer Component (Async / Playwright)
================================================================================

Site footer: about blurb with social icons, category links, information
links (about, shipping, returns, terms), support block and copyright.

Every probe scrolls the footer into view first; the footer renders lazily
on some routes.

================================================================================
"""

from __future__ import annotations

from typing import Dict

import allure
from loguru import logger

from testsuites.ui_testing.framework.interactions import QUERY_ERRORS
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import Component


def _testid(value: str) -> Locator:
    return Locator.css(f"[data-testid='{value}']", value)


class FooterComponent(Component):
    """Footer component (async)."""

    FOOTER_CONTAINER = Locator.css("footer, [data-testid='footer']", "footer")
    COPYRIGHT = Locator.css(
        "footer p, footer .copyright, footer [class*='copyright'], footer [data-testid='footer-about'] p",
        "copyright",
    )
    SOCIAL_LINK_ICONS = Locator.css(
        "[data-testid='footer-about'] a.rounded-full, [data-testid='footer-about'] a[href='#'], "
        "footer a .lucide-instagram, footer a .lucide-twitter, footer a .lucide-github",
        "social icons",
    )

    SECTIONS: Dict[str, Locator] = {
        name: _testid(f"footer-{name}")
        for name in ("about", "products", "information", "support", "copyright")
    }

    CATEGORY_LINKS: Dict[str, Locator] = {
        name: _testid(f"footer-link-{name}")
        for name in ("electronics", "photography", "accessories")
    }

    INFO_LINKS: Dict[str, Locator] = {
        name: _testid(f"footer-link-{name}")
        for name in ("about", "shipping", "returns", "terms")
    }

    async def is_loaded(self) -> bool:
        return await self.ui.is_displayed(self.FOOTER_CONTAINER)

    @allure.step("Verify footer is displayed")
    async def is_footer_displayed(self) -> bool:
        return await self.ui.is_displayed(self.FOOTER_CONTAINER)

    @allure.step("Scroll to footer")
    async def scroll_to_footer(self) -> None:
        try:
            await self.ui.scroll_to_element(self.FOOTER_CONTAINER, timeout=5)
        except QUERY_ERRORS as e:
            logger.debug(f"Could not scroll to footer: {e}")

    @allure.step("Get copyright text")
    async def get_copyright_text(self) -> str:
        await self.scroll_to_footer()
        try:
            if await self.ui.is_displayed(self.COPYRIGHT):
                return await self.ui.get_text(self.COPYRIGHT, timeout=2)
        except QUERY_ERRORS as e:
            logger.debug(f"Copyright text unavailable: {e}")
        return ""

    async def is_section_displayed(self, name: str) -> bool:
        """Whether a footer section (about, products, information, support, copyright) exists."""
        await self.scroll_to_footer()
        return await self.ui.is_element_present(self.SECTIONS[name])

    async def is_about_section_displayed(self) -> bool:
        return await self.is_section_displayed("about")

    async def is_products_section_displayed(self) -> bool:
        return await self.is_section_displayed("products")

    async def is_information_section_displayed(self) -> bool:
        return await self.is_section_displayed("information")

    async def is_support_section_displayed(self) -> bool:
        return await self.is_section_displayed("support")

    async def is_copyright_section_displayed(self) -> bool:
        return await self.is_section_displayed("copyright")

    async def get_social_link_icons_count(self) -> int:
        await self.scroll_to_footer()
        return await self.ui.element_count(self.SOCIAL_LINK_ICONS)

    # =========================================================================
    # Links
    # =========================================================================

    def _link(self, name: str) -> Locator:
        if name in self.CATEGORY_LINKS:
            return self.CATEGORY_LINKS[name]
        return self.INFO_LINKS[name]

    async def is_link_displayed(self, name: str) -> bool:
        await self.scroll_to_footer()
        return await self.ui.is_element_present(self._link(name))

    async def click_category_link(self, name: str) -> None:
        """Click electronics, photography, or accessories."""
        with allure.step(f"Click {name} category link in footer"):
            logger.info(f"Clicking {name} link in footer")
            await self.scroll_to_footer()
            await self.ui.click(self.CATEGORY_LINKS[name])
            await self.ui.wait_for_page_load()

    async def click_info_link(self, name: str) -> None:
        """
        Click about, shipping, returns, or terms and wait for the route change.

        Uses a script click; the footer links sit under a sticky overlay on
        small viewports.
        """
        locator = self.INFO_LINKS[name]
        with allure.step(f"Click {name} link in footer"):
            await self.scroll_to_footer()
            element = await self.ui.wait_for_clickable(locator)
            previous_url = self.current_url()
            logger.info(f"{name} link href: {await element.get_attribute('href')}")

            await self.ui.js_click(element)
            await self.ui.wait_for_url_change(previous_url)
            await self.ui.wait_for_page_load()
            logger.info(f"After clicking {name} link, URL is: {self.current_url()}")

    async def click_electronics_link(self) -> None:
        await self.click_category_link("electronics")

    async def click_photography_link(self) -> None:
        await self.click_category_link("photography")

    async def click_accessories_link(self) -> None:
        await self.click_category_link("accessories")

    async def click_about_link(self) -> None:
        await self.click_info_link("about")

    async def click_shipping_link(self) -> None:
        await self.click_info_link("shipping")

    async def click_returns_link(self) -> None:
        await self.click_info_link("returns")

    async def click_terms_link(self) -> None:
        await self.click_info_link("terms")


__all__ = ["FooterComponent"]
