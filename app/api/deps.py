"""API-layer dependency functions.

Re-exports all dependency factories from ``app.dependencies`` so that
endpoint modules only need to import from ``app.api.deps``.
"""

from app.dependencies import (
    get_task_store,
    get_clock,
    get_task_creation_service,
    get_today_dashboard,
)

__all__ = [
    "get_task_store",
    "get_clock",
    "get_task_creation_service",
    "get_today_dashboard",
]
