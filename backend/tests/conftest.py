import os

# Must be set before `todo_app` is imported so the app never touches todos.db.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from todo_app.database import make_engine, create_db_and_tables
from todo_app.main import app, get_todo_service
from todo_app.repositories import InMemoryTodoRepository, SqlTodoRepository
from todo_app.services import TodoService


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database with the todos table."""
    eng = make_engine("sqlite://")
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def sql_repo(engine):
    return SqlTodoRepository(engine)


@pytest.fixture(params=["sql", "memory"])
def repo(request, engine):
    """Each repository implementation in turn."""
    if request.param == "sql":
        return SqlTodoRepository(engine)
    return InMemoryTodoRepository()


@pytest.fixture
def service(repo):
    return TodoService(repo)


@pytest.fixture
def client(sql_repo):
    app.dependency_overrides[get_todo_service] = lambda: TodoService(sql_repo)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
