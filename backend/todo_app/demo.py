"""Console walkthrough of the todo CRUD operations.

Usage: python -m todo_app.demo [--database-url URL]

The driver wires `TodoService` to a `SqlTodoRepository` and then adds,
lists, updates, filters, completes and deletes todos, printing each step.
"""

import argparse
import logging
from typing import Callable, List, Optional

from . import models
from .config import settings
from .database import make_engine, create_db_and_tables
from .repositories import SqlTodoRepository
from .services import TodoService

SAMPLE_TODOS = [
    ("Learn dependency injection", "Wire services through constructors", False),
    ("Build todo app", "Create a CRUD application with layers", False),
    ("Practice SQL", "Learn parameterized queries", True),
]


def _mark(todo: models.Todo) -> str:
    return "[x]" if todo.completed else "[ ]"


def run_demo(service: TodoService, out: Callable[[str], None] = print) -> List[models.Todo]:
    """Run the walkthrough against `service` and return the remaining todos."""
    out("--- CREATE ---")
    for title, description, completed in SAMPLE_TODOS:
        created = service.add_todo(models.Todo(title=title, description=description, completed=completed))
        out(f"created #{created.id}: {created.title}")

    out("--- READ (all) ---")
    all_todos = service.get_all_todos()
    if not all_todos:
        out("no todos found")
    else:
        out(f"total todos: {len(all_todos)}")
        for todo in all_todos:
            out(f"{_mark(todo)} #{todo.id} {todo.title} - {todo.description}")

    out("--- READ (by id) ---")
    first = all_todos[0] if all_todos else None
    found = service.get_todo_by_id(first.id) if first else None
    if found is None:
        out("first todo not found")
    else:
        out(f"found #{found.id}: {found.title}")

    out("--- UPDATE ---")
    if found is not None:
        found.title = f"{found.title} (revised)"
        found.description = "Constructor injection, no container"
        service.update_todo(found)
        out(f"after update: {service.get_todo_by_id(found.id).title}")

    out("--- FILTER (by status) ---")
    done = service.get_todos_by_status(True)
    out(f"completed todos: {len(done)}")
    for todo in done:
        out(f"  [x] {todo.title}")
    pending = service.get_todos_by_status(False)
    out(f"incomplete todos: {len(pending)}")
    for todo in pending:
        out(f"  [ ] {todo.title}")

    out("--- MARK COMPLETED ---")
    target = next((t for t in all_todos if not t.completed), None)
    if target is not None:
        service.mark_as_completed(target.id)
        out(f"marked #{target.id} completed")

    out("--- DELETE ---")
    if all_todos:
        last = all_todos[-1]
        service.delete_todo(last.id)
        out(f"deleted #{last.id}")

    out("--- FINAL STATE ---")
    remaining = service.get_all_todos()
    out(f"total todos: {len(remaining)}")
    for todo in remaining:
        out(f"{_mark(todo)} {todo.title}")
    return remaining


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the todo CRUD walkthrough")
    parser.add_argument('--database-url', default=settings.DATABASE_URL, help='SQLAlchemy URL of the todo database')
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    engine = make_engine(args.database_url, echo=settings.SQL_ECHO)
    try:
        create_db_and_tables(engine)
        run_demo(TodoService(SqlTodoRepository(engine)))
    finally:
        engine.dispose()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
