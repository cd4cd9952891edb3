"""FastAPI application entrypoint and HTTP controllers.

Controllers are intentionally thin: they accept requests, delegate to
`TodoService`, and return JSON responses. Service errors are turned
into HTTP status codes by the exception handlers below.

Endpoints implemented:
- GET /health
- POST /todos
- GET /todos (optional `completed` filter)
- GET /todos/{todo_id}
- PUT /todos/{todo_id}
- DELETE /todos/{todo_id}
- POST /todos/{todo_id}/complete
- POST /todos/{todo_id}/incomplete
"""

import json
import logging
import time
import uuid
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models
from .config import settings
from .database import engine, create_db_and_tables
from .exceptions import NotFoundError, StorageAccessError, ValidationError
from .repositories import SqlTodoRepository
from .schemas import TodoIn, TodoOut
from .services import TodoService

app = FastAPI(title="Todo API")
logger = logging.getLogger("todo_app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


def get_todo_service() -> TodoService:
    """FastAPI dependency returning a service wired to the SQL repository."""
    return TodoService(SqlTodoRepository(engine))


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
            ensure_ascii=True,
        ),
    )
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageAccessError)
async def storage_error_handler(request: Request, exc: StorageAccessError) -> JSONResponse:
    logger.error("storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "storage unavailable"})


@app.get('/health')
def health():
    return {'status': 'ok'}


@app.post('/todos', response_model=TodoOut, status_code=201)
def create_todo(payload: TodoIn, svc: TodoService = Depends(get_todo_service)):
    """Create a todo. Blank titles are rejected with 400."""
    todo = models.Todo(title=payload.title, description=payload.description, completed=payload.completed)
    return svc.add_todo(todo)


@app.get('/todos', response_model=List[TodoOut])
def list_todos(completed: Optional[bool] = None, svc: TodoService = Depends(get_todo_service)):
    """List all todos, or only those matching `completed` when given."""
    if completed is None:
        return svc.get_all_todos()
    return svc.get_todos_by_status(completed)


@app.get('/todos/{todo_id}', response_model=TodoOut)
def get_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    todo = svc.get_todo_by_id(todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail='todo not found')
    return todo


@app.put('/todos/{todo_id}', response_model=TodoOut)
def replace_todo(todo_id: int, payload: TodoIn, svc: TodoService = Depends(get_todo_service)):
    """Replace title, description and completed of an existing todo."""
    todo = models.Todo(id=todo_id, title=payload.title, description=payload.description, completed=payload.completed)
    return svc.update_todo(todo)


@app.delete('/todos/{todo_id}', status_code=204)
def delete_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    svc.delete_todo(todo_id)
    return Response(status_code=204)


@app.post('/todos/{todo_id}/complete', response_model=TodoOut)
def complete_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    return svc.mark_as_completed(todo_id)


@app.post('/todos/{todo_id}/incomplete', response_model=TodoOut)
def reopen_todo(todo_id: int, svc: TodoService = Depends(get_todo_service)):
    return svc.mark_as_incomplete(todo_id)
