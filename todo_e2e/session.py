"""Authenticated session establishment.

Signs the test user in and races two UI markers under one deadline:
- success: the new-todo input becomes visible
- rejection: an "Invalid credentials" message becomes visible

Whichever appears first decides the outcome. If neither appears before the
deadline the outcome is indeterminate. Nothing here retries; retry policy
belongs to the test runner.
"""

import asyncio
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import (
    CONFIG_DIR,
    DEFAULT_APP_ENV,
    DEFAULT_LOGIN_TIMEOUT_MS,
    Credentials,
    require_credentials,
)
from .errors import IndeterminateLogin, RejectedCredentials
from .selectors import (
    EMAIL_LABEL,
    INVALID_CREDENTIALS_TEXT,
    PASSWORD_FIELD_NAME,
    SIGN_IN_BUTTON_NAME,
    TODO_INPUT_PLACEHOLDER,
    LoginSelectors,
    TodoSelectors,
)


DEFAULT_ENV_FILE = f"{CONFIG_DIR}/.env.{DEFAULT_APP_ENV}"


class SessionOutcome(Enum):
    """Result of one login attempt."""

    ESTABLISHED = "established"
    REJECTED = "rejected"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class LoginMarkers:
    """Locates the login form and both outcome markers on a page.

    Uses accessible locators (label, role, placeholder, text). Works with both
    the sync and the async Playwright API since it only builds locators.
    """

    email_label: re.Pattern = EMAIL_LABEL
    password_name: re.Pattern = PASSWORD_FIELD_NAME
    submit_name: re.Pattern = SIGN_IN_BUTTON_NAME
    success_placeholder: re.Pattern = TODO_INPUT_PLACEHOLDER
    rejection_text: re.Pattern = INVALID_CREDENTIALS_TEXT

    def email_field(self, page):
        return page.get_by_label(self.email_label)

    def password_field(self, page):
        return page.get_by_role("textbox", name=self.password_name)

    def submit_button(self, page):
        return page.get_by_role("button", name=self.submit_name)

    def success_marker(self, page):
        return (
            page.get_by_role("textbox")
            .and_(page.get_by_placeholder(self.success_placeholder))
            .first
        )

    def rejection_marker(self, page):
        return page.get_by_text(self.rejection_text)


class DataIdLoginMarkers(LoginMarkers):
    """Same markers, located through the app's data-id attributes."""

    def email_field(self, page):
        return page.locator(LoginSelectors.EMAIL_INPUT)

    def password_field(self, page):
        return page.locator(LoginSelectors.PASSWORD_INPUT)

    def submit_button(self, page):
        return page.locator(LoginSelectors.SIGN_IN_BUTTON)

    def success_marker(self, page):
        return page.locator(TodoSelectors.TODO_INPUT)

    def rejection_marker(self, page):
        return page.locator(LoginSelectors.ERROR_MESSAGE)


DEFAULT_MARKERS = LoginMarkers()


def classify(success_visible: bool, rejection_visible: bool) -> SessionOutcome:
    """Map marker visibility to an outcome. Success wins a tie."""
    if success_visible:
        return SessionOutcome.ESTABLISHED
    if rejection_visible:
        return SessionOutcome.REJECTED
    return SessionOutcome.INDETERMINATE


def raise_for_outcome(
    outcome: SessionOutcome,
    timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
    env_file: str = DEFAULT_ENV_FILE,
) -> SessionOutcome:
    """Raise the matching error for a failed outcome, return it otherwise."""
    if outcome is SessionOutcome.REJECTED:
        raise RejectedCredentials(env_file=env_file)
    if outcome is SessionOutcome.INDETERMINATE:
        raise IndeterminateLogin(timeout_ms)
    return outcome


# --- Sync API ---


def submit_credentials(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    login_path: str = "/",
) -> None:
    """Open the login surface, fill both fields and submit."""
    markers = markers or DEFAULT_MARKERS
    page.goto(login_path)
    markers.email_field(page).fill(credentials.email)
    markers.password_field(page).fill(credentials.password)
    markers.submit_button(page).click()


def attempt_login(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
    login_path: str = "/",
) -> SessionOutcome:
    """Submit credentials and classify the result.

    The sync API cannot run two waits at once, so the race is a wait on the
    union of both markers followed by a visibility check. A marker that
    disappears between the two sends the race back to waiting with whatever
    is left of the one shared deadline.

    Returns:
        The outcome. Playwright errors other than timeouts propagate.
    """
    markers = markers or DEFAULT_MARKERS
    submit_credentials(page, credentials, markers, login_path)

    success = markers.success_marker(page)
    rejection = markers.rejection_marker(page)
    either = success.or_(rejection).first

    deadline = time.monotonic() + timeout_ms / 1000
    remaining_ms = timeout_ms
    while True:
        try:
            either.wait_for(state="visible", timeout=remaining_ms)
        except PlaywrightTimeoutError:
            return SessionOutcome.INDETERMINATE

        outcome = classify(success.is_visible(), rejection.is_visible())
        if outcome is not SessionOutcome.INDETERMINATE:
            return outcome

        # Playwright treats timeout=0 as "wait forever".
        remaining_ms = (deadline - time.monotonic()) * 1000
        if remaining_ms <= 0:
            return SessionOutcome.INDETERMINATE


def establish_session(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
    login_path: str = "/",
    env_file: str = DEFAULT_ENV_FILE,
) -> SessionOutcome:
    """Sign in or raise.

    Raises:
        ConfigurationError: credentials missing, before touching the page.
        RejectedCredentials: the app rejected the credentials.
        IndeterminateLogin: neither marker appeared before the deadline.
    """
    require_credentials(credentials, env_file=env_file)
    outcome = attempt_login(page, credentials, markers, timeout_ms, login_path)
    return raise_for_outcome(outcome, timeout_ms, env_file)


# --- Async API ---


async def async_submit_credentials(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    login_path: str = "/",
) -> None:
    """Async variant of submit_credentials."""
    markers = markers or DEFAULT_MARKERS
    await page.goto(login_path)
    await markers.email_field(page).fill(credentials.email)
    await markers.password_field(page).fill(credentials.password)
    await markers.submit_button(page).click()


def _observed(task: "asyncio.Future") -> bool:
    error = task.exception()
    if error is None:
        return True
    if isinstance(error, PlaywrightTimeoutError):
        return False
    raise error


async def _cancel(tasks: Iterable["asyncio.Future"]) -> None:
    tasks = list(tasks)
    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.gather(*tasks, return_exceptions=True)


async def async_attempt_login(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
    login_path: str = "/",
) -> SessionOutcome:
    """Submit credentials and race both markers as concurrent waits.

    Both waits start together with the same timeout. The first one to see
    its marker decides; the other is cancelled.
    """
    markers = markers or DEFAULT_MARKERS
    await async_submit_credentials(page, credentials, markers, login_path)

    waiters = {
        asyncio.ensure_future(
            markers.success_marker(page).wait_for(state="visible", timeout=timeout_ms)
        ): SessionOutcome.ESTABLISHED,
        asyncio.ensure_future(
            markers.rejection_marker(page).wait_for(state="visible", timeout=timeout_ms)
        ): SessionOutcome.REJECTED,
    }

    pending = set(waiters)
    try:
        while pending:
            done, pending = await asyncio.wait(
                pending, return_when=asyncio.FIRST_COMPLETED
            )
            observed = {waiters[task] for task in done if _observed(task)}
            if observed:
                return classify(
                    SessionOutcome.ESTABLISHED in observed,
                    SessionOutcome.REJECTED in observed,
                )
        return SessionOutcome.INDETERMINATE
    finally:
        await _cancel(pending)


async def async_establish_session(
    page,
    credentials: Credentials,
    markers: Optional[LoginMarkers] = None,
    timeout_ms: int = DEFAULT_LOGIN_TIMEOUT_MS,
    login_path: str = "/",
    env_file: str = DEFAULT_ENV_FILE,
) -> SessionOutcome:
    """Async variant of establish_session."""
    require_credentials(credentials, env_file=env_file)
    outcome = await async_attempt_login(
        page, credentials, markers, timeout_ms, login_path
    )
    return raise_for_outcome(outcome, timeout_ms, env_file)
