"""Todo page object."""

import re
from typing import List

from playwright.sync_api import Locator

from ..selectors import TodoSelectors
from .base import BasePage


FILTERS = ("all", "active", "completed")


def _parse_count(text) -> int:
    """Leading integer of a counter label, 0 when absent."""
    match = re.match(r"\s*(\d+)", text or "")
    return int(match.group(1)) if match else 0


class TodoPage(BasePage):
    """Todo list, its form, filters and counters."""

    # Form
    @property
    def todo_input(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_INPUT)

    @property
    def todo_submit_button(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_SUBMIT_BUTTON)

    @property
    def todo_clear_button(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_CLEAR_BUTTON)

    @property
    def todo_list_container(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_LIST_CONTAINER)

    # Counters
    @property
    def todo_count(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_COUNT)

    @property
    def todo_remaining(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_REMAINING)

    @property
    def todo_completed(self) -> Locator:
        return self.page.locator(TodoSelectors.TODO_COMPLETED)

    def _filter_button(self, filter_type: str) -> Locator:
        selectors = {
            "all": TodoSelectors.FILTER_ALL,
            "active": TodoSelectors.FILTER_ACTIVE,
            "completed": TodoSelectors.FILTER_COMPLETED,
        }
        if filter_type not in selectors:
            raise ValueError(
                f"Unknown filter: {filter_type}. Expected one of: {', '.join(FILTERS)}"
            )
        return self.page.locator(selectors[filter_type])

    def add_todo(self, todo_text: str) -> None:
        self.todo_input.fill(todo_text)
        self.todo_submit_button.click()

    def clear_todo_input(self) -> None:
        self.todo_clear_button.click()

    def get_all_todos(self) -> List[Locator]:
        return self.todo_list_container.locator(TodoSelectors.TODO_ITEM_CONTAINER).all()

    def get_todo_by_text(self, todo_text: str) -> Locator:
        return self.todo_list_container.locator(TodoSelectors.TODO_ITEM_CONTAINER).filter(
            has_text=todo_text
        )

    def complete_todo(self, todo_text: str) -> None:
        self.get_todo_by_text(todo_text).locator(TodoSelectors.TODO_ITEM_CHECKBOX).check()

    def delete_todo(self, todo_text: str) -> None:
        self.get_todo_by_text(todo_text).locator(TodoSelectors.TODO_ITEM_DELETE).click()

    def edit_todo(self, todo_text: str, new_text: str) -> None:
        """Open the inline editor, replace the text and confirm with Enter."""
        item = self.get_todo_by_text(todo_text)
        item.locator(TodoSelectors.TODO_ITEM_EDIT).click()

        edit_input = item.locator(TodoSelectors.TODO_ITEM_EDIT_INPUT)
        edit_input.fill(new_text)
        edit_input.press("Enter")

    def filter_todos(self, filter_type: str) -> None:
        """Show all, active or completed todos."""
        self._filter_button(filter_type).click()

    def clear_completed_todos(self) -> None:
        self.page.locator(TodoSelectors.FILTER_CLEAR_COMPLETED).click()

    def get_todo_count(self) -> int:
        return _parse_count(self.todo_count.text_content())

    def get_remaining_todos_count(self) -> int:
        return _parse_count(self.todo_remaining.text_content())

    def get_completed_todos_count(self) -> int:
        return _parse_count(self.todo_completed.text_content())

    def is_todo_visible(self, todo_text: str) -> bool:
        return self.get_todo_by_text(todo_text).is_visible()

    def is_todo_completed(self, todo_text: str) -> bool:
        checkbox = self.get_todo_by_text(todo_text).locator(TodoSelectors.TODO_ITEM_CHECKBOX)
        return checkbox.is_checked()

    def verify_todo_list_loaded(self) -> None:
        self.wait_for_element_visible(self.todo_list_container)
        self.wait_for_element_visible(self.todo_input)
        self.wait_for_element_visible(self.todo_submit_button)
