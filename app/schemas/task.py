from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.common import SuccessResponse


class TaskCreateRequest(BaseModel):
    """Body of ``POST /api/v1/tasks``.

    Fields are untyped so that a missing or non-string value is rejected
    by the service's own validation order rather than by pydantic.  Unknown
    keys (a client-supplied ``tenant_id`` for instance) are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    application_id: Any = None
    task_type: Any = None
    due_at: Any = None


class TaskCreateResponse(SuccessResponse):
    task_id: str


class TaskRecord(BaseModel):
    """A task row as returned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    application_id: str
    type: str  # "call|email|review"
    due_at: datetime
    status: str  # "pending|completed"
    tenant_id: str
    completed_at: Optional[datetime] = None
