"""Business logic for todos.

`TodoService` sits between the HTTP controllers (or any other driver)
and a `TodoRepository`. It is intentionally thin: it validates input,
checks that a todo exists before changing it and composes repository
calls. The repository is passed in by the caller, so the service never
knows which storage backend it is talking to.
"""

import logging
from typing import List, Optional

from . import models
from .exceptions import NotFoundError, ValidationError
from .repositories import TodoRepository

logger = logging.getLogger("todo_app.services")


def _validate_title(todo: models.Todo) -> None:
    title = todo.title
    if title is None or not isinstance(title, str) or not title.strip():
        raise ValidationError("todo title cannot be empty")


class TodoService:
    """Validate and persist todos through the injected repository."""
    def __init__(self, repository: TodoRepository):
        self.repository = repository

    def _require(self, todo_id: int) -> models.Todo:
        todo = self.repository.find_by_id(todo_id)
        if todo is None:
            raise NotFoundError(todo_id)
        return todo

    def add_todo(self, todo: models.Todo) -> models.Todo:
        """Create a todo after checking its title.

        Raises `ValidationError` when the title is missing or blank.
        Returns the stored todo including its new id.
        """
        _validate_title(todo)
        created = self.repository.create(todo)
        logger.info("todo created id=%s title=%r", created.id, created.title)
        return created

    def get_todo_by_id(self, todo_id: int) -> Optional[models.Todo]:
        """Return the todo or `None` if it does not exist."""
        return self.repository.find_by_id(todo_id)

    def get_all_todos(self) -> List[models.Todo]:
        return self.repository.find_all()

    def update_todo(self, todo: models.Todo) -> models.Todo:
        """Replace title, description and completed of an existing todo.

        The title is validated first (`ValidationError`), then the id is
        looked up (`NotFoundError`). All three fields are written.
        """
        _validate_title(todo)
        self._require(todo.id)
        self.repository.update(todo)
        logger.info("todo updated id=%s title=%r", todo.id, todo.title)
        return todo

    def delete_todo(self, todo_id: int) -> None:
        """Delete a todo; raises `NotFoundError` if it does not exist."""
        self._require(todo_id)
        self.repository.delete(todo_id)
        logger.info("todo deleted id=%s", todo_id)

    def get_todos_by_status(self, completed: bool) -> List[models.Todo]:
        return self.repository.find_by_completed(completed)

    def mark_as_completed(self, todo_id: int) -> models.Todo:
        """Set `completed` on a stored todo (read, modify, write back)."""
        return self._set_completed(todo_id, True)

    def mark_as_incomplete(self, todo_id: int) -> models.Todo:
        return self._set_completed(todo_id, False)

    def _set_completed(self, todo_id: int, completed: bool) -> models.Todo:
        todo = self._require(todo_id)
        todo.completed = completed
        self.repository.update(todo)
        logger.info("todo marked %s id=%s", "completed" if completed else "incomplete", todo_id)
        return todo
