"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the storefront UI tests, providing fixtures
for browser session management, page objects, and failure evidence.

Key Features:
- One browser session per test, never shared
- Configuration resolved once per test from config.yaml, environment and
  command-line options (--ui-browser, --ui-headless, --ui-base-url)
- Initial navigation to the base URL with retry and backoff
- Screenshot + page source capture on failure, session always closed
- Page Object fixtures for all pages

================================================================================
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import AsyncGenerator, Awaitable, Callable

import pytest
from loguru import logger

from autotest_tools.common import init_logger
from testsuites.ui_testing.framework.browser_manager import BrowserManager, BrowserSession
from testsuites.ui_testing.framework.config import ConfigLoader, ShopConfig
from testsuites.ui_testing.framework.evidence import capture_failure_evidence
from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.interactions import QUERY_ERRORS, Interactions
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.waits import wait_until
from testsuites.ui_testing.pages import (
    AboutPage,
    CartPage,
    HomePage,
    LoginPage,
    ProductDetailPage,
    ProductsPage,
    ReturnsPage,
    SearchResultsPage,
    ShippingPage,
    TermsPage,
)


NAVIGATION_ATTEMPTS = 3
NAVIGATION_BACKOFF_SECONDS = 2
CART_LOAD_TIMEOUT = 30
UI_UPDATE_TIMEOUT = 10
CART_SKELETON = Locator.css("[data-slot='skeleton']", "cart skeleton")


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture
def shop_config(request) -> ShopConfig:
    """
    Resolved configuration for one test.

    Command-line options win over environment variables, which win over
    config/config.yaml.
    """
    loader = ConfigLoader(
        overrides={
            "browser": request.config.getoption("--ui-browser"),
            "headless": request.config.getoption("--ui-headless"),
            "base.url": request.config.getoption("--ui-base-url"),
        }
    )
    init_logger(level=loader.log_level)
    return loader.snapshot()


# ================================================================================
# Browser Fixtures
# ================================================================================

async def _open_base_url(session: BrowserSession, ui: Interactions) -> None:
    """Load the storefront root, retrying with 2s then 4s backoff."""
    url = session.config.base_url
    for attempt in range(1, NAVIGATION_ATTEMPTS + 1):
        try:
            await ui.navigate(url)
            logger.info(f"Navigated to base URL: {url}")
            return
        except QUERY_ERRORS as e:
            if attempt == NAVIGATION_ATTEMPTS:
                logger.error(f"Navigation to {url} failed after {attempt} attempts")
                raise
            delay = NAVIGATION_BACKOFF_SECONDS * attempt
            logger.warning(f"Navigation attempt {attempt} failed ({e}), retrying in {delay}s")
            await asyncio.sleep(delay)


@pytest.fixture
async def browser_session(
    request,
    shop_config: ShopConfig,
) -> AsyncGenerator[BrowserSession, None]:
    """
    Function-scoped browser session.

    Opens the base URL before the test. On a failed test call, saves a
    screenshot and the page source to the artifacts directory; the session
    is closed in every case.
    """
    session = await BrowserManager(shop_config).create_session()
    try:
        await _open_base_url(session, Interactions(session.page, shop_config))
        yield session
    finally:
        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            await capture_failure_evidence(session, request.node.nodeid, Path(shop_config.artifacts_dir))
        await session.close()


@pytest.fixture
def ui(browser_session: BrowserSession) -> Interactions:
    return Interactions(browser_session.page, browser_session.config)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(ui: Interactions) -> HomePage:
    return HomePage(ui)


@pytest.fixture
def login_page(ui: Interactions) -> LoginPage:
    return LoginPage(ui)


@pytest.fixture
def cart_page(ui: Interactions) -> CartPage:
    return CartPage(ui)


@pytest.fixture
def products_page(ui: Interactions) -> ProductsPage:
    return ProductsPage(ui)


@pytest.fixture
def product_detail_page(ui: Interactions) -> ProductDetailPage:
    return ProductDetailPage(ui)


@pytest.fixture
def search_results_page(ui: Interactions) -> SearchResultsPage:
    return SearchResultsPage(ui)


@pytest.fixture
def about_page(ui: Interactions) -> AboutPage:
    return AboutPage(ui)


@pytest.fixture
def shipping_page(ui: Interactions) -> ShippingPage:
    return ShippingPage(ui)


@pytest.fixture
def returns_page(ui: Interactions) -> ReturnsPage:
    return ReturnsPage(ui)


@pytest.fixture
def terms_page(ui: Interactions) -> TermsPage:
    return TermsPage(ui)


# ================================================================================
# Composite Fixtures
# ================================================================================

@pytest.fixture
async def logged_in_customer(login_page: LoginPage) -> LoginPage:
    """Log the demo customer in; the cart requires an authenticated session."""
    await login_page.open()
    await login_page.login_with_customer_account()
    return login_page


@pytest.fixture
def add_product_to_cart(
    home_page: HomePage,
    product_detail_page: ProductDetailPage,
) -> Callable[[int], Awaitable[str]]:
    """
    Returns a coroutine function that opens the index-th featured product
    from the home page, adds it to the cart and returns its title.
    """

    async def _add(index: int = 0) -> str:
        await home_page.open()
        await home_page.click_product_by_index(index)
        title = await product_detail_page.get_product_title()
        await product_detail_page.click_add_to_cart_and_wait()
        logger.info(f"Added to cart: {title}")
        return title

    return _add


@pytest.fixture
def open_cart(
    ui: Interactions,
    product_detail_page: ProductDetailPage,
    cart_page: CartPage,
) -> Callable[[], Awaitable[CartPage]]:
    """Returns a coroutine function that goes to the cart through the header and waits for it to render."""

    async def _open() -> CartPage:
        await product_detail_page.go_to_cart()
        await ui.wait_for_url_containing("/cart", timeout=CART_LOAD_TIMEOUT)
        await ui.wait_for_content_settled(
            loading=CART_SKELETON,
            results=cart_page.CART_ITEMS,
            empty=cart_page.EMPTY_CART_MESSAGE,
            timeout=CART_LOAD_TIMEOUT,
        )
        return cart_page

    return _open


@pytest.fixture
async def cart_with_product(
    logged_in_customer: LoginPage,
    add_product_to_cart: Callable[[int], Awaitable[str]],
    open_cart: Callable[[], Awaitable[CartPage]],
) -> CartPage:
    """Logged-in customer with the first featured product in the cart, cart page open."""
    await add_product_to_cart(0)
    return await open_cart()


@pytest.fixture
def eventually(ui: Interactions) -> Callable[..., Awaitable[bool]]:
    """
    Returns a coroutine function that polls an async predicate and reports
    whether it held before the timeout, for assertions on re-rendered state.
    """

    async def _eventually(condition, description: str, timeout: float = UI_UPDATE_TIMEOUT) -> bool:
        try:
            await wait_until(condition, timeout=timeout, poll_interval=ui.poll_interval, description=description)
        except WaitTimeoutError:
            logger.warning(f"Gave up waiting for {description}")
            return False
        return True

    return _eventually


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Store each phase report on the item as rep_setup / rep_call / rep_teardown.

    The browser_session fixture reads rep_call during teardown to decide
    whether to capture failure evidence.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
