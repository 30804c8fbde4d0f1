"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login form with email/password fields, inline validation messages, a
"continue as guest" link and the printed demo credentials.

`login()` verifies its own postcondition: the URL must leave /login within
the explicit wait, otherwise PagePostconditionError (an AssertionError) is
raised with the URL it got stuck on. Negative tests use
`submit_credentials()`, which makes no such check.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.data.credentials import (
    ADMIN_CREDENTIALS,
    CUSTOMER_CREDENTIALS,
    Credentials,
)
from testsuites.ui_testing.framework.exceptions import PagePostconditionError, WaitTimeoutError
from testsuites.ui_testing.framework.locators import Locator
from testsuites.ui_testing.framework.page_base import PageBase


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/login"
    PAGE_TITLE = "Login"

    PAGE_HEADING = Locator.css("h1.text-4xl", "login heading")
    LOGIN_FORM = Locator.css("[data-testid='login-form']", "login form")
    EMAIL_INPUT = Locator.css("[data-testid='login-email-input']", "email input")
    PASSWORD_INPUT = Locator.css("[data-testid='login-password-input']", "password input")
    SUBMIT_BUTTON = Locator.css("[data-testid='login-submit-button']", "sign in button")
    CONTINUE_AS_GUEST_LINK = Locator.css("[data-testid='continue-as-guest-link']", "continue as guest")
    EMAIL_ERROR_MESSAGE = Locator.css("[data-testid='email-error-message']", "email error")
    PASSWORD_ERROR_MESSAGE = Locator.css("[data-testid='password-error-message']", "password error")
    ADMIN_CREDENTIALS_DISPLAY = Locator.xpath("//p[contains(text(),'admin@test.com')]", "admin credentials hint")
    CUSTOMER_CREDENTIALS_DISPLAY = Locator.xpath("//p[contains(text(),'user@test.com')]", "customer credentials hint")

    @allure.step("Verify login page is loaded")
    async def is_page_loaded(self) -> bool:
        if "/login" not in self.current_url():
            return False
        return await self.ui.is_displayed(self.LOGIN_FORM, timeout=self.ui.explicit_wait)

    async def get_page_heading(self) -> str:
        return await self.text_or_empty(self.PAGE_HEADING, wait=self.ui.explicit_wait)

    async def is_login_form_displayed(self) -> bool:
        return await self.ui.is_displayed(self.LOGIN_FORM)

    async def is_email_input_displayed(self) -> bool:
        return await self.ui.is_displayed(self.EMAIL_INPUT)

    async def is_password_input_displayed(self) -> bool:
        return await self.ui.is_displayed(self.PASSWORD_INPUT)

    async def is_sign_in_button_displayed(self) -> bool:
        return await self.ui.is_displayed(self.SUBMIT_BUTTON)

    @allure.step("Submit login form (email={email})")
    async def submit_credentials(self, email: str, password: str) -> None:
        """Fill and submit the form without checking where it lands."""
        await self.ui.type(self.EMAIL_INPUT, email)
        await self.ui.type(self.PASSWORD_INPUT, password)
        await self.ui.click(self.SUBMIT_BUTTON)
        await self.ui.wait_for_page_load()

    @allure.step("Login with email: {email}")
    async def login(self, email: str, password: str) -> None:
        """
        Log in and verify the browser left /login.

        Raises:
            PagePostconditionError: Still on /login after the explicit wait
        """
        logger.info(f"Logging in with email: {email}")
        await self.submit_credentials(email, password)
        await self._wait_for_successful_login()

    async def login_with(self, credentials: Credentials) -> None:
        await self.login(credentials.email, credentials.password)

    @allure.step("Login with admin credentials")
    async def login_with_admin_account(self) -> None:
        await self.login_with(ADMIN_CREDENTIALS)

    @allure.step("Login with customer credentials")
    async def login_with_customer_account(self) -> None:
        await self.login_with(CUSTOMER_CREDENTIALS)

    @allure.step("Continue as guest")
    async def continue_as_guest(self) -> None:
        await self.ui.click(self.CONTINUE_AS_GUEST_LINK)
        await self.ui.wait_for_page_load()

    async def get_email_error_message(self) -> str:
        return await self.text_or_empty(self.EMAIL_ERROR_MESSAGE)

    async def get_password_error_message(self) -> str:
        return await self.text_or_empty(self.PASSWORD_ERROR_MESSAGE)

    @allure.step("Get all error messages")
    async def get_error_messages(self) -> str:
        """Both validation messages as 'Email: ... | Password: ...', or ''."""
        email_error = await self.get_email_error_message()
        password_error = await self.get_password_error_message()
        if not email_error and not password_error:
            return ""
        return f"Email: {email_error} | Password: {password_error}"

    @allure.step("Check if test credentials are displayed")
    async def are_test_credentials_displayed(self) -> bool:
        return await self.ui.is_displayed(self.ADMIN_CREDENTIALS_DISPLAY) and await self.ui.is_displayed(
            self.CUSTOMER_CREDENTIALS_DISPLAY
        )

    def is_on_login_page(self) -> bool:
        return "/login" in self.current_url()

    async def _wait_for_successful_login(self) -> None:
        try:
            url = await self.ui.wait_for_url_not_containing("/login")
        except WaitTimeoutError as e:
            current_url = self.current_url()
            logger.error(f"Login verification timeout - current URL: {current_url}")
            raise PagePostconditionError(
                f"Login verification timeout - still on login page: {current_url}"
            ) from e
        logger.info(f"Login successful - redirected to: {url}")


__all__ = ["LoginPage"]
