from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from app.schemas.task import TaskRecord


class TaskStore(ABC):
    """Store access needed by the creation service and the dashboard.

    Handlers receive an instance explicitly; the API wires in
    :class:`~app.repositories.sql_store.SqlTaskStore` and tests pass an
    in-memory fake.
    """

    @abstractmethod
    async def get_application_tenant(self, application_id: str) -> Optional[str]:
        """Return the application's ``tenant_id``, or ``None`` if unknown."""
        raise NotImplementedError

    @abstractmethod
    async def insert_task(
        self,
        *,
        application_id: str,
        task_type: str,
        due_at: datetime,
        tenant_id: str,
    ) -> str:
        """Persist a pending task and return its generated id."""
        raise NotImplementedError

    @abstractmethod
    async def list_tasks_due_between(
        self, start: datetime, end: datetime
    ) -> List[TaskRecord]:
        """Return non-completed tasks with ``start <= due_at < end`` by due time."""
        raise NotImplementedError

    @abstractmethod
    async def complete_task(self, task_id: str, completed_at: datetime) -> bool:
        """Mark a task completed; ``False`` if nothing changed."""
        raise NotImplementedError
