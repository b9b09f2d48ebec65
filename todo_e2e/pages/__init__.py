"""Page objects for the todo app."""

from .base import BasePage
from .factory import PageFactory
from .login import LoginPage
from .todo import TodoPage

__all__ = [
    "BasePage",
    "LoginPage",
    "TodoPage",
    "PageFactory",
]
