"""
Server-acknowledged edits for the admin list panels.

A panel keeps its records in a `ListState`. Every change is a command whose
server call runs first; the local list only changes once the server has
answered successfully, so a failed call never leaves the panel showing data
the server does not have.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import pydash
from pydantic import BaseModel

from booking_core.errors import ApiError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

Item = Dict[str, Any]


class Notification(BaseModel):
    level: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.level == "error"


class ListCommand:
    success_message = "Saved"

    def send(self) -> Any:
        raise NotImplementedError

    def apply(self, items: List[Item], result: Any, key: str) -> List[Item]:
        raise NotImplementedError


class CreateItem(ListCommand):
    success_message = "Created successfully"

    def __init__(self, create: Callable[[Item], Item], data: Item):
        self.create = create
        self.data = data

    def send(self) -> Item:
        return self.create(self.data)

    def apply(self, items: List[Item], result: Item, key: str) -> List[Item]:
        return items + [result]


class UpdateItem(ListCommand):
    success_message = "Updated successfully"

    def __init__(self, update: Callable[[str, Item], Item], item_id: str, changes: Item):
        self.update = update
        self.item_id = item_id
        self.changes = changes

    def send(self) -> Item:
        return self.update(self.item_id, self.changes)

    def apply(self, items: List[Item], result: Item, key: str) -> List[Item]:
        # servers answer with the stored record; fall back to the sent changes
        index = pydash.find_index(items, lambda item: item.get(key) == self.item_id)
        if index < 0:
            return items
        updated = result if isinstance(result, dict) and result.get(key) else {**items[index], **self.changes}
        return items[:index] + [updated] + items[index + 1:]


class DeleteItem(ListCommand):
    success_message = "Deleted successfully"

    def __init__(self, delete: Callable[[str], Any], item_id: str):
        self.delete = delete
        self.item_id = item_id

    def send(self) -> Any:
        return self.delete(self.item_id)

    def apply(self, items: List[Item], result: Any, key: str) -> List[Item]:
        return [item for item in items if item.get(key) != self.item_id]


class ListState:
    def __init__(self, items: Optional[List[Item]] = None, key: str = "id"):
        self._items: List[Item] = pydash.clone_deep(items or [])
        self.key = key
        self.notifications: List[Notification] = []

    @property
    def items(self) -> List[Item]:
        return pydash.clone_deep(self._items)

    def load(self, items: List[Item]):
        self._items = pydash.clone_deep(items)

    def find(self, item_id: str) -> Optional[Item]:
        return pydash.find(self._items, lambda item: item.get(self.key) == item_id)

    def execute(self, command: ListCommand) -> bool:
        """
        Runs `command` against the server and applies it locally on success.

        Returns:
            bool: True when the server acknowledged the change.
        """
        try:
            result = command.send()
        except ApiError as e:
            logger.warning(f"{type(command).__name__} rejected: {e.message}")
            self.notify("error", e.message or "Request failed")
            return False

        self._items = command.apply(pydash.clone_deep(self._items), result, self.key)
        self.notify("success", command.success_message)
        return True

    def notify(self, level: str, message: str):
        self.notifications.append(Notification(level=level, message=message))

    def pop_notifications(self) -> List[Notification]:
        notifications, self.notifications = self.notifications, []
        return notifications
