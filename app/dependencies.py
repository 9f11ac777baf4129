from datetime import datetime
from typing import Callable

from fastapi import Depends

from app.core.config import settings
from app.core.database import open_session
from app.core.timeutils import resolve_timezone, utcnow
from app.repositories.interfaces import TaskStore
from app.repositories.sql_store import SqlTaskStore
from app.services.task_creation_service import TaskCreationService
from app.services.today_dashboard import TodayDashboard


# ---------------------------------------------------------------------------
# Store and clock factories — overridden in tests
# ---------------------------------------------------------------------------


def get_task_store() -> TaskStore:
    """Build the SQL-backed store.

    Sessions are opened per operation, so missing connection secrets are
    raised by the first store call rather than here.
    """
    return SqlTaskStore(session_factory=open_session)


def get_clock() -> Callable[[], datetime]:
    return utcnow


# ---------------------------------------------------------------------------
# Service factory functions
# ---------------------------------------------------------------------------


def get_task_creation_service(
    store: TaskStore = Depends(get_task_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskCreationService:
    """Build a :class:`TaskCreationService` with injected dependencies."""
    return TaskCreationService(store=store, clock=clock)


def get_today_dashboard(
    store: TaskStore = Depends(get_task_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TodayDashboard:
    """Build a :class:`TodayDashboard` for the configured timezone."""
    return TodayDashboard(
        store,
        clock=clock,
        tz=resolve_timezone(settings.DASHBOARD_TIMEZONE),
    )
