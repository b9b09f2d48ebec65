"""E2E test configuration for Playwright.

The whole suite is skipped when BASE_URL is not configured. Tests that need
a signed-in user skip when TEST_USER_EMAIL / TEST_USER_PASSWORD are unset.
"""
from pathlib import Path

import pytest
from playwright.sync_api import Page

from todo_e2e.config import Credentials, E2EConfig, load_config, require_credentials
from todo_e2e.pages import LoginPage, PageFactory, TodoPage
from todo_e2e.session import establish_session


E2E_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = E2E_DIR.parent

CONFIG = load_config(str(PROJECT_ROOT))


def pytest_collection_modifyitems(config, items):
    if CONFIG.base_url:
        return

    skip = pytest.mark.skip(
        reason=f"Requires BASE_URL in {CONFIG.env_file_hint} (see config/.env.example)"
    )
    for item in items:
        if E2E_DIR in Path(str(item.fspath)).resolve().parents:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def e2e_config() -> E2EConfig:
    return CONFIG


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, e2e_config: E2EConfig):
    """Configure browser context."""
    return {
        **browser_context_args,
        "base_url": e2e_config.base_url,
        "viewport": {"width": 1280, "height": 720},
    }


@pytest.fixture
def test_user(e2e_config: E2EConfig) -> Credentials:
    """Configured test user; skips the test when credentials are unset."""
    if not e2e_config.credentials.is_complete:
        pytest.skip(
            f"Requires TEST_USER_EMAIL and TEST_USER_PASSWORD in {e2e_config.env_file_hint}"
        )
    return e2e_config.credentials


@pytest.fixture
def authenticated_page(page: Page, e2e_config: E2EConfig) -> Page:
    """Page signed in as the test user.

    Raises ConfigurationError when credentials are missing. Request
    test_user before it to skip instead.
    """
    require_credentials(e2e_config.credentials, env_file=e2e_config.env_file_hint)
    establish_session(
        page,
        e2e_config.credentials,
        timeout_ms=e2e_config.login_timeout_ms,
        env_file=e2e_config.env_file_hint,
    )
    return page


@pytest.fixture
def login_page(page: Page) -> LoginPage:
    return PageFactory.create_login_page(page)


@pytest.fixture
def todo_page(page: Page, test_user: Credentials, e2e_config: E2EConfig) -> TodoPage:
    """Todo page for a signed-in test user; skips without credentials."""
    establish_session(
        page,
        test_user,
        timeout_ms=e2e_config.login_timeout_ms,
        env_file=e2e_config.env_file_hint,
    )
    return PageFactory.create_todo_page(page)
