"""Repository classes encapsulating database operations.

`TodoRepository` names the operations the service layer relies on. Two
implementations are provided: `SqlTodoRepository` talks to the `todos`
table through SQLModel, and `InMemoryTodoRepository` keeps rows in a
dict (handy for tests and throwaway runs). Neither applies business
rules; callers check existence before mutating.

Both repositories hand out fresh `Todo` instances built from the four
stored columns, so callers may modify the returned objects freely.
"""

import itertools
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, NamedTuple, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from . import models
from .exceptions import StorageAccessError

logger = logging.getLogger("todo_app.repositories")


def _to_todo(row) -> models.Todo:
    """Map a stored row onto a detached `Todo` (id, title, description, completed)."""
    return models.Todo(
        id=row.id,
        title=row.title,
        description=row.description,
        completed=bool(row.completed),
    )


class TodoRepository(Protocol):
    """Data access operations required by `TodoService`."""

    def create(self, todo: models.Todo) -> models.Todo: ...

    def find_by_id(self, todo_id: int) -> Optional[models.Todo]: ...

    def find_all(self) -> List[models.Todo]: ...

    def update(self, todo: models.Todo) -> None: ...

    def delete(self, todo_id: int) -> None: ...

    def find_by_completed(self, completed: bool) -> List[models.Todo]: ...


class SqlTodoRepository:
    """CRUD operations for `Todo` rows in a relational database.

    Every call opens its own `Session` and closes it before returning,
    so connections go back to the engine's pool on success and failure
    alike.
    """
    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        with Session(self.engine) as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                session.rollback()
                raise StorageAccessError(f"could not {action} todo: {exc}") from exc

    def _select(self):
        return select(models.Todo.id, models.Todo.title, models.Todo.description, models.Todo.completed)

    def create(self, todo: models.Todo) -> models.Todo:
        """Insert a new row and return it with the database-assigned id."""
        row = models.Todo(title=todo.title, description=todo.description, completed=bool(todo.completed))
        with self._session("create") as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_todo(row)

    def find_by_id(self, todo_id: int) -> Optional[models.Todo]:
        """Return the `Todo` with primary key `todo_id` or `None`.

        Lookup failures are reported as `None` as well; they are logged
        so they can be told apart from a missing row after the fact.
        """
        try:
            with self._session("read") as session:
                row = session.exec(self._select().where(models.Todo.id == todo_id)).first()
                return _to_todo(row) if row is not None else None
        except Exception:
            logger.warning("lookup of todo %s failed, treating it as absent", todo_id, exc_info=True)
            return None

    def find_all(self) -> List[models.Todo]:
        """Return every todo in the order the database yields them."""
        with self._session("list") as session:
            return [_to_todo(row) for row in session.exec(self._select()).all()]

    def update(self, todo: models.Todo) -> None:
        """Overwrite title, description and completed for `todo.id`.

        Does nothing when no row has that id.
        """
        if todo.id is None:
            return
        with self._session("update") as session:
            row = session.get(models.Todo, todo.id)
            if row is None:
                return
            row.title = todo.title
            row.description = todo.description
            row.completed = bool(todo.completed)
            session.add(row)
            session.commit()

    def delete(self, todo_id: int) -> None:
        """Remove the row with `todo_id`, if there is one."""
        with self._session("delete") as session:
            row = session.get(models.Todo, todo_id)
            if row is None:
                return
            session.delete(row)
            session.commit()

    def find_by_completed(self, completed: bool) -> List[models.Todo]:
        """Return all todos whose `completed` flag equals `completed`."""
        stmt = self._select().where(models.Todo.completed == bool(completed))
        with self._session("list") as session:
            return [_to_todo(row) for row in session.exec(stmt).all()]


class _Row(NamedTuple):
    id: int
    title: str
    description: Optional[str]
    completed: bool


class InMemoryTodoRepository:
    """Dict-backed stand-in for the `todos` table.

    Ids come from a counter and are never handed out twice, even after
    deletes.
    """
    def __init__(self):
        self._rows: Dict[int, _Row] = {}
        self._ids = itertools.count(1)

    def create(self, todo: models.Todo) -> models.Todo:
        row = _Row(next(self._ids), todo.title, todo.description, bool(todo.completed))
        self._rows[row.id] = row
        return _to_todo(row)

    def find_by_id(self, todo_id: int) -> Optional[models.Todo]:
        row = self._rows.get(todo_id)
        return _to_todo(row) if row is not None else None

    def find_all(self) -> List[models.Todo]:
        return [_to_todo(row) for row in self._rows.values()]

    def update(self, todo: models.Todo) -> None:
        if todo.id not in self._rows:
            return
        self._rows[todo.id] = _Row(todo.id, todo.title, todo.description, bool(todo.completed))

    def delete(self, todo_id: int) -> None:
        self._rows.pop(todo_id, None)

    def find_by_completed(self, completed: bool) -> List[models.Todo]:
        return [_to_todo(row) for row in self._rows.values() if row.completed == bool(completed)]
