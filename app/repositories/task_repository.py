from datetime import datetime
from typing import Any, List

from sqlalchemy import select, update

from app.models.task import Task
from app.repositories.base import BaseRepository
from app.schemas.common import TaskStatus


class TaskRepository(BaseRepository):
    """Encapsulates queries against the ``tasks`` table."""

    async def create(self, **kwargs: Any) -> Task:
        """Insert a new task and flush so its generated id is populated."""
        task = Task(**kwargs)
        self._db.add(task)
        await self.flush()
        return task

    async def list_due_between(self, start: datetime, end: datetime) -> List[Task]:
        """Return open tasks with ``start <= due_at < end``, soonest first."""
        query = (
            select(Task)
            .where(
                Task.due_at >= start,
                Task.due_at < end,
                Task.status != TaskStatus.completed.value,
            )
            .order_by(Task.due_at.asc())
        )
        result = await self._db.execute(query)
        return list(result.scalars().all())

    async def mark_completed(self, task_id: str, completed_at: datetime) -> bool:
        """Complete a task that is not already completed.

        Returns ``True`` when a row was updated.  A second call for the
        same task matches nothing and leaves the first ``completed_at``
        in place.
        """
        result = await self._db.execute(
            update(Task)
            .where(
                Task.id == task_id,
                Task.status != TaskStatus.completed.value,
            )
            .values(status=TaskStatus.completed.value, completed_at=completed_at)
        )
        return result.rowcount > 0
