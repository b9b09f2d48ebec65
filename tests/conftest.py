"""Shared fixtures: fake Playwright pages for the login surface."""

import asyncio

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from todo_e2e.selectors import LoginSelectors, TodoSelectors


ENV_VARS = [
    "APP_ENV",
    "BASE_URL",
    "BROWSER",
    "CI",
    "LOGIN_TIMEOUT_MS",
    "TEST_USER_EMAIL",
    "TEST_USER_PASSWORD",
]

SELECTOR_NAMES = {
    LoginSelectors.EMAIL_INPUT: "email",
    LoginSelectors.PASSWORD_INPUT: "password",
    LoginSelectors.SIGN_IN_BUTTON: "submit",
    LoginSelectors.ERROR_MESSAGE: "rejection",
    TodoSelectors.TODO_INPUT: "success",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of configuration tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeLocator:
    """Records interactions; visibility comes from the owning page."""

    def __init__(self, page, name, members=None):
        self.page = page
        self.name = name
        self.members = members or (name,)

    @property
    def first(self):
        return self

    def or_(self, other):
        return type(self)(self.page, f"{self.name}|{other.name}", self.members + other.members)

    def and_(self, other):
        # Narrowed to the right-hand match.
        return type(self)(self.page, other.name, other.members)

    def fill(self, value):
        self.page.calls.append(("fill", self.name, value))

    def click(self):
        self.page.calls.append(("click", self.name))
        if self.name == "submit":
            self.page.submitted = True

    def is_visible(self):
        return any(self.page.marker_visible(member) for member in self.members)

    def wait_for(self, state="visible", timeout=None):
        self.page.calls.append(("wait_for", self.name, timeout))
        if self.page.error:
            raise self.page.error
        self.page.hidden = False
        if not self.is_visible():
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        self.page.after_wait()


class FakePage:
    """Login surface whose markers appear once the form is submitted.

    Args:
        visible: Markers shown after submit ("success", "rejection").
        error: Raised from wait_for instead of waiting.
        rerenders: Number of waits after which the markers are briefly gone
            again by the time their visibility is checked.
    """

    def __init__(self, visible=(), error=None, rerenders=0):
        self.visible = set(visible)
        self.error = error
        self.rerenders = rerenders
        self.calls = []
        self.submitted = False
        self.hidden = False

    def marker_visible(self, name):
        return self.submitted and not self.hidden and name in self.visible

    def after_wait(self):
        if self.rerenders:
            self.rerenders -= 1
            self.hidden = True

    def goto(self, url):
        self.calls.append(("goto", url))
        self.submitted = False

    def get_by_label(self, pattern):
        return FakeLocator(self, "email")

    def get_by_role(self, role, name=None):
        return FakeLocator(self, "password" if role == "textbox" else "submit")

    def get_by_placeholder(self, pattern):
        return FakeLocator(self, "success")

    def get_by_text(self, pattern):
        return FakeLocator(self, "rejection")

    def locator(self, selector):
        return FakeLocator(self, SELECTOR_NAMES[selector])


class AsyncFakeLocator(FakeLocator):
    """Async locator whose marker shows up after a delay."""

    async def fill(self, value):
        self.page.calls.append(("fill", self.name, value))

    async def click(self):
        self.page.calls.append(("click", self.name))

    async def wait_for(self, state="visible", timeout=None):
        self.page.calls.append(("wait_for", self.name, timeout))
        limit = timeout / 1000
        delay = self.page.delays.get(self.name)
        try:
            if self.name in self.page.errors:
                await asyncio.sleep(delay or 0)
                raise self.page.errors[self.name]
            if delay is None or delay > limit:
                await asyncio.sleep(limit)
                raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.page.cancelled.append(self.name)
            raise


class AsyncFakePage:
    """Async login surface.

    Args:
        delays: Seconds after which each marker ("success", "rejection") appears.
        errors: Exceptions raised by a marker's wait instead of appearing.
    """

    def __init__(self, delays=None, errors=None):
        self.delays = dict(delays or {})
        self.errors = dict(errors or {})
        self.calls = []
        self.cancelled = []

    async def goto(self, url):
        self.calls.append(("goto", url))

    def get_by_label(self, pattern):
        return AsyncFakeLocator(self, "email")

    def get_by_role(self, role, name=None):
        return AsyncFakeLocator(self, "password" if role == "textbox" else "submit")

    def get_by_placeholder(self, pattern):
        return AsyncFakeLocator(self, "success")

    def get_by_text(self, pattern):
        return AsyncFakeLocator(self, "rejection")

    def locator(self, selector):
        return AsyncFakeLocator(self, SELECTOR_NAMES[selector])


@pytest.fixture
def fake_page():
    return FakePage


@pytest.fixture
def async_fake_page():
    return AsyncFakePage
