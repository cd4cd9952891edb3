"""SQLModel data models.

The application persists a single entity, `Todo`, in the `todos` table.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class Todo(SQLModel, table=True):
    """A task record.

    Fields:
    - `id`: primary key assigned by the database on insert, `None` before
    - `title`: required, non-empty text (checked by the service layer)
    - `description`: free text, may be empty
    - `completed`: done flag, indexed for status filtering
    """
    __tablename__ = "todos"
    # AUTOINCREMENT keeps SQLite from handing out a deleted max id again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = ""
    completed: bool = Field(default=False, index=True)
