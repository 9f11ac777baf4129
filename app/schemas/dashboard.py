from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class TodayTask(BaseModel):
    """A single task row shown on the today dashboard."""

    id: str
    type: str
    application_id: str
    due_at: datetime
    due_time: str  # "h:mm AM|PM" in the dashboard timezone
    status: str


class DashboardView(BaseModel):
    state: str  # "loading|ready|failed"
    tasks: List[TodayTask] = []
    error: Optional[str] = None
