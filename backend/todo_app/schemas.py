"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Title checks are left to
the service so HTTP callers and other drivers hit the same rule.
"""

from pydantic import BaseModel
from typing import Optional


class TodoIn(BaseModel):
    """Payload for creating a todo or replacing all of its fields."""
    title: Optional[str] = None
    description: Optional[str] = ""
    completed: bool = False


class TodoOut(BaseModel):
    """A stored todo as returned by the API."""
    id: int
    title: str
    description: Optional[str] = ""
    completed: bool
