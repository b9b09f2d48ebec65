"""Login page object."""

from playwright.sync_api import Locator

from ..config import Credentials, DEFAULT_LOGIN_TIMEOUT_MS
from ..selectors import CommonSelectors, LoginSelectors
from ..session import DataIdLoginMarkers, SessionOutcome, establish_session
from .base import BasePage


class LoginPage(BasePage):
    """Login page located through data-id selectors."""

    markers = DataIdLoginMarkers()

    @property
    def email_input(self) -> Locator:
        return self.page.locator(LoginSelectors.EMAIL_INPUT)

    @property
    def password_input(self) -> Locator:
        return self.page.locator(LoginSelectors.PASSWORD_INPUT)

    @property
    def sign_in_button(self) -> Locator:
        return self.page.locator(LoginSelectors.SIGN_IN_BUTTON)

    @property
    def error_message(self) -> Locator:
        return self.page.locator(LoginSelectors.ERROR_MESSAGE)

    @property
    def forgot_password_link(self) -> Locator:
        return self.page.locator(LoginSelectors.FORGOT_PASSWORD_LINK)

    @property
    def register_link(self) -> Locator:
        return self.page.locator(LoginSelectors.REGISTER_LINK)

    @property
    def login_form(self) -> Locator:
        return self.page.locator(LoginSelectors.LOGIN_FORM)

    @property
    def recaptcha_container(self) -> Locator:
        return self.page.locator(LoginSelectors.RECAPTCHA_CONTAINER)

    @property
    def header(self) -> Locator:
        return self.page.locator(CommonSelectors.HEADER)

    @property
    def logo(self) -> Locator:
        return self.page.locator(CommonSelectors.LOGO)

    def login(self, email: str, password: str) -> None:
        """Fill the form and submit without waiting for the outcome."""
        self.email_input.fill(email)
        self.password_input.fill(password)
        self.sign_in_button.click()

    def sign_in(
        self,
        credentials: Credentials,
        timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
        login_path: str = "/",
    ) -> SessionOutcome:
        """Sign in and wait for the todo app, failing fast on rejection."""
        return establish_session(
            self.page,
            credentials,
            markers=self.markers,
            timeout_ms=timeout_ms,
            login_path=login_path,
        )

    def wait_for_error_message(self) -> None:
        self.wait_for_element_visible(self.error_message)

    def is_error_message_visible(self) -> bool:
        return self.error_message.is_visible()

    def get_error_message_text(self) -> str:
        return self.error_message.text_content() or ""

    def click_forgot_password(self) -> None:
        self.forgot_password_link.click()

    def click_register(self) -> None:
        self.register_link.click()

    def is_login_form_visible(self) -> bool:
        return self.login_form.is_visible()

    def is_recaptcha_visible(self) -> bool:
        return self.recaptcha_container.is_visible()

    def verify_page_loaded(self) -> None:
        """Wait for the form and its controls to be visible."""
        self.wait_for_element_visible(self.login_form)
        self.wait_for_element_visible(self.email_input)
        self.wait_for_element_visible(self.password_input)
        self.wait_for_element_visible(self.sign_in_button)
