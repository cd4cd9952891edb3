import pytest
from fastapi.testclient import TestClient

from todo_app.database import make_engine
from todo_app.main import app, get_todo_service
from todo_app.repositories import SqlTodoRepository
from todo_app.services import TodoService


def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers


def test_create_get_and_list(client):
    r = client.post('/todos', json={'title': 'Write tests', 'description': 'api layer'})
    assert r.status_code == 201
    body = r.json()
    assert body['id'] >= 1
    assert body['completed'] is False

    r2 = client.get(f"/todos/{body['id']}")
    assert r2.status_code == 200
    assert r2.json()['title'] == 'Write tests'

    r3 = client.get('/todos')
    assert [t['id'] for t in r3.json()] == [body['id']]


def test_blank_title_is_rejected(client):
    r = client.post('/todos', json={'title': '   '})
    assert r.status_code == 400
    assert client.get('/todos').json() == []


def test_missing_title_is_rejected(client):
    r = client.post('/todos', json={'description': 'no title'})
    assert r.status_code == 400


def test_get_missing_returns_404(client):
    assert client.get('/todos/999').status_code == 404


def test_replace_todo(client):
    created = client.post('/todos', json={'title': 'draft', 'description': 'v1'}).json()
    r = client.put(f"/todos/{created['id']}", json={'title': 'final', 'description': 'v2', 'completed': True})
    assert r.status_code == 200
    fetched = client.get(f"/todos/{created['id']}").json()
    assert fetched == {'id': created['id'], 'title': 'final', 'description': 'v2', 'completed': True}


def test_replace_missing_returns_404(client):
    r = client.put('/todos/77', json={'title': 'nobody'})
    assert r.status_code == 404


def test_delete(client):
    created = client.post('/todos', json={'title': 'temp'}).json()
    assert client.delete(f"/todos/{created['id']}").status_code == 204
    assert client.get(f"/todos/{created['id']}").status_code == 404
    assert client.delete(f"/todos/{created['id']}").status_code == 404


def test_complete_incomplete_and_filter(client):
    a = client.post('/todos', json={'title': 'a'}).json()
    b = client.post('/todos', json={'title': 'b'}).json()
    r = client.post(f"/todos/{a['id']}/complete")
    assert r.status_code == 200
    assert r.json()['completed'] is True

    done = client.get('/todos', params={'completed': 'true'}).json()
    pending = client.get('/todos', params={'completed': 'false'}).json()
    assert [t['id'] for t in done] == [a['id']]
    assert [t['id'] for t in pending] == [b['id']]

    r2 = client.post(f"/todos/{a['id']}/incomplete")
    assert r2.json()['completed'] is False
    assert client.post('/todos/999/complete').status_code == 404


def test_replace_with_blank_title_returns_400(client):
    created = client.post('/todos', json={'title': 'keep me'}).json()
    r = client.put(f"/todos/{created['id']}", json={'title': '  ', 'completed': True})
    assert r.status_code == 400
    assert client.get(f"/todos/{created['id']}").json()['title'] == 'keep me'


@pytest.fixture
def tableless_client():
    """Client whose service talks to a database without the todos table."""
    eng = make_engine("sqlite://")
    app.dependency_overrides[get_todo_service] = lambda: TodoService(SqlTodoRepository(eng))
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        eng.dispose()


def test_storage_failure_returns_503(tableless_client):
    r = tableless_client.post('/todos', json={'title': 'lost'})
    assert r.status_code == 503
    assert r.json() == {'detail': 'storage unavailable'}
    assert tableless_client.get('/todos').status_code == 503
    assert tableless_client.get('/todos', params={'completed': 'true'}).status_code == 503
