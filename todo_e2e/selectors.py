"""Selectors and locator patterns for the todo app.

Attribute selectors target the app's data-id hooks. The regex patterns are
used with Playwright's accessible locators (get_by_label, get_by_role, ...).
"""

import re


def data_id(value: str) -> str:
    """CSS selector for a data-id attribute."""
    return f'[data-id="{value}"]'


# Placeholder of the "new todo" input (the login page has different placeholders)
TODO_INPUT_PLACEHOLDER = re.compile(r"what|todo|add|new", re.IGNORECASE)

# Text shown when login fails
INVALID_CREDENTIALS_TEXT = re.compile(r"invalid credentials", re.IGNORECASE)

EMAIL_LABEL = re.compile(r"email", re.IGNORECASE)
PASSWORD_FIELD_NAME = re.compile(r"password", re.IGNORECASE)
SIGN_IN_BUTTON_NAME = re.compile(r"sign in", re.IGNORECASE)


class CommonSelectors:
    """Global elements shared across pages."""

    # Header
    HEADER = data_id("header")
    LOGO = data_id("logo")
    USER_MENU = data_id("user-menu")
    NOTIFICATION_ICON = data_id("notification-icon")

    # Footer
    FOOTER = data_id("footer")
    COPYRIGHT_TEXT = data_id("copyright")

    # Modal
    MODAL_OVERLAY = data_id("modal-overlay")
    MODAL_CONTENT = data_id("modal-content")
    MODAL_TITLE = data_id("modal-title")

    # Forms
    SUBMIT_BUTTON = data_id("submit-button")
    CANCEL_BUTTON = data_id("cancel-button")

    # Loading states
    SPINNER = data_id("spinner")
    PROGRESS_BAR = data_id("progress-bar")

    # Navigation
    BREADCRUMB = data_id("breadcrumb")
    PAGINATION = data_id("pagination")
    SEARCH_INPUT = data_id("search-input")

    @staticmethod
    def form_field(field_name: str) -> str:
        return f'{data_id("form-field")}[data-name="{field_name}"]'

    @staticmethod
    def form_error(field_name: str) -> str:
        return f'{data_id("form-error")}[data-field="{field_name}"]'


class LoginSelectors:
    """Login page elements."""

    EMAIL_INPUT = data_id("email-input")
    PASSWORD_INPUT = data_id("password-input")
    SIGN_IN_BUTTON = data_id("sign-in-button")
    ERROR_MESSAGE = data_id("error-message")
    FORGOT_PASSWORD_LINK = data_id("forgot-password-link")
    REGISTER_LINK = data_id("register-link")
    LOGIN_FORM = data_id("login-form")
    RECAPTCHA_CONTAINER = data_id("recaptcha-container")


class TodoSelectors:
    """Todo app elements."""

    # Form
    TODO_INPUT = data_id("todo-input")
    TODO_SUBMIT_BUTTON = data_id("todo-submit")
    TODO_CLEAR_BUTTON = data_id("todo-clear")

    # List
    TODO_LIST_CONTAINER = data_id("todo-list-container")
    TODO_ITEM_CONTAINER = data_id("todo-item-container")
    TODO_ITEM_TEXT = data_id("todo-item-text")
    TODO_ITEM_CHECKBOX = data_id("todo-item-checkbox")
    TODO_ITEM_DELETE = data_id("todo-item-delete")
    TODO_ITEM_EDIT = data_id("todo-item-edit")
    TODO_ITEM_EDIT_INPUT = 'input[type="text"]'

    # Filters
    FILTER_ALL = data_id("filter-all")
    FILTER_ACTIVE = data_id("filter-active")
    FILTER_COMPLETED = data_id("filter-completed")
    FILTER_CLEAR_COMPLETED = data_id("filter-clear-completed")

    # Statistics
    TODO_COUNT = data_id("todo-count")
    TODO_REMAINING = data_id("todo-remaining")
    TODO_COMPLETED = data_id("todo-completed")
