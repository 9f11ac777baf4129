"""Pydantic schemas package – re-exports for convenience."""

# Common enums
from app.schemas.common import (
    TaskType as TaskType,
    TaskStatus as TaskStatus,
    ErrorResponse as ErrorResponse,
    SuccessResponse as SuccessResponse,
)

# Task schemas
from app.schemas.task import (
    TaskCreateRequest as TaskCreateRequest,
    TaskCreateResponse as TaskCreateResponse,
    TaskRecord as TaskRecord,
)

# Dashboard schemas
from app.schemas.dashboard import (
    TodayTask as TodayTask,
    DashboardView as DashboardView,
)
