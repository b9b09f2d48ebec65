"""Base page object with helpers shared by all pages."""

from pathlib import Path

from playwright.sync_api import Locator, Page, expect


DEFAULT_WAIT_MS = 5000


class BasePage:
    """Common functionality for page objects."""

    screenshot_dir = "screenshots"

    def __init__(self, page: Page):
        self.page = page

    def navigate_to(self, url: str) -> None:
        """Navigate to a URL and wait for the DOM to load."""
        self.page.goto(url)
        self.wait_for_page_load()

    def wait_for_page_load(self) -> None:
        self.page.wait_for_load_state("domcontentloaded")

    def wait_for_element_visible(self, locator: Locator, timeout: int = DEFAULT_WAIT_MS) -> None:
        expect(locator).to_be_visible(timeout=timeout)

    def wait_for_element_hidden(self, locator: Locator, timeout: int = DEFAULT_WAIT_MS) -> None:
        expect(locator).to_be_hidden(timeout=timeout)

    def wait_for_element_enabled(self, locator: Locator, timeout: int = DEFAULT_WAIT_MS) -> None:
        expect(locator).to_be_enabled(timeout=timeout)

    def take_screenshot(self, name: str) -> Path:
        """Save a full-page screenshot as <screenshot_dir>/<name>.png."""
        path = Path(self.screenshot_dir) / f"{name}.png"
        self.page.screenshot(path=str(path), full_page=True)
        return path

    def wait_for_network_idle(self) -> None:
        self.page.wait_for_load_state("networkidle")

    def clear_local_storage(self) -> None:
        self.page.evaluate("() => localStorage.clear()")

    def clear_cookies(self) -> None:
        self.page.context.clear_cookies()
