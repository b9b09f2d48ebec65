"""Factory for page objects."""

from playwright.sync_api import Page

from .login import LoginPage
from .todo import TodoPage


class PageFactory:
    """Creates page objects bound to a Playwright page."""

    @staticmethod
    def create_login_page(page: Page) -> LoginPage:
        return LoginPage(page)

    @staticmethod
    def create_todo_page(page: Page) -> TodoPage:
        return TodoPage(page)
