"""Error types raised by the service and repository layers."""


class TodoError(Exception):
    """Base class for errors raised by the todo core."""


class ValidationError(TodoError, ValueError):
    """A todo failed a business rule (e.g. blank title)."""


class NotFoundError(TodoError, LookupError):
    """A mutation targeted a todo id that does not exist."""

    def __init__(self, todo_id: int):
        super().__init__(f"todo with id {todo_id} not found")
        self.todo_id = todo_id


class StorageAccessError(TodoError):
    """A round trip to the record store failed."""
