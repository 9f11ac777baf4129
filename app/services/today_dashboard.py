import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from app.core.exceptions import InvalidDashboardTransitionError
from app.core.timeutils import day_window, format_due_time, utcnow
from app.repositories.interfaces import TaskStore
from app.schemas.dashboard import DashboardView, TodayTask

logger = logging.getLogger(__name__)


class DashboardPhase(str, Enum):
    loading = "loading"
    ready = "ready"
    failed = "failed"


class DashboardEvent(str, Enum):
    reload = "reload"
    loaded = "loaded"
    failed = "failed"


# (current phase, event) -> next phase.  Pairs not listed are rejected.
TRANSITIONS: Dict[Tuple[DashboardPhase, DashboardEvent], DashboardPhase] = {
    (DashboardPhase.loading, DashboardEvent.reload): DashboardPhase.loading,
    (DashboardPhase.loading, DashboardEvent.loaded): DashboardPhase.ready,
    (DashboardPhase.loading, DashboardEvent.failed): DashboardPhase.failed,
    (DashboardPhase.ready, DashboardEvent.reload): DashboardPhase.loading,
    (DashboardPhase.ready, DashboardEvent.failed): DashboardPhase.failed,
    (DashboardPhase.failed, DashboardEvent.reload): DashboardPhase.loading,
    (DashboardPhase.failed, DashboardEvent.failed): DashboardPhase.failed,
}


@dataclass(frozen=True)
class DashboardState:
    phase: DashboardPhase
    tasks: Tuple[TodayTask, ...] = ()
    error: Optional[str] = None

    def to_view(self) -> DashboardView:
        return DashboardView(
            state=self.phase.value, tasks=list(self.tasks), error=self.error
        )


def _failure_message(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback


class TodayDashboard:
    """Lists tasks due today and completes them.

    The controller owns an explicit :class:`DashboardState`.  Every fetch
    passes through ``loading``; a completion writes first and then
    re-fetches, so the task list only ever reflects what the store
    returned.  ``reload`` and ``complete`` are serialised per instance.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        clock: Callable[[], datetime] = utcnow,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._tz = tz
        self._state = DashboardState(DashboardPhase.loading)
        self._lock = asyncio.Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    def _apply(
        self,
        event: DashboardEvent,
        *,
        tasks: Tuple[TodayTask, ...] = (),
        error: Optional[str] = None,
    ) -> DashboardState:
        current = self._state.phase
        nxt = TRANSITIONS.get((current, event))
        if nxt is None:
            raise InvalidDashboardTransitionError(
                f"Cannot apply {event.value} while {current.value}"
            )
        if nxt is DashboardPhase.ready:
            self._state = DashboardState(nxt, tasks=tasks)
        elif nxt is DashboardPhase.failed:
            self._state = DashboardState(nxt, error=error)
        else:
            self._state = DashboardState(nxt)
        return self._state

    async def reload(self) -> DashboardState:
        """Fetch today's open tasks."""
        async with self._lock:
            return await self._fetch()

    async def complete(self, task_id: str) -> DashboardState:
        """Mark *task_id* completed, then re-fetch.

        A failed update moves the dashboard to ``failed`` without
        re-fetching.
        """
        async with self._lock:
            try:
                await self._store.complete_task(task_id, self._clock())
            except Exception as exc:
                logger.warning("Completing task %s failed: %s", task_id, exc)
                return self._apply(
                    DashboardEvent.failed,
                    error=_failure_message(exc, "Failed to update task"),
                )
            return await self._fetch()

    async def _fetch(self) -> DashboardState:
        self._apply(DashboardEvent.reload)
        start, end = day_window(self._clock(), self._tz)
        try:
            records = await self._store.list_tasks_due_between(start, end)
        except Exception as exc:
            logger.warning("Fetching today's tasks failed: %s", exc)
            return self._apply(
                DashboardEvent.failed,
                error=_failure_message(exc, "Failed to fetch tasks"),
            )
        tasks = tuple(
            TodayTask(
                id=record.id,
                type=record.type,
                application_id=record.application_id,
                due_at=record.due_at,
                due_time=format_due_time(record.due_at, self._tz),
                status=record.status,
            )
            for record in records
        )
        return self._apply(DashboardEvent.loaded, tasks=tasks)
