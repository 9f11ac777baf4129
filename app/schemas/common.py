from enum import Enum
from pydantic import BaseModel


class TaskType(str, Enum):
    call = "call"
    email = "email"
    review = "review"


class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"


class ErrorResponse(BaseModel):
    """Body of every non-2xx response from the task API."""

    error: str


class SuccessResponse(BaseModel):
    """Generic success response base."""

    success: bool = True
