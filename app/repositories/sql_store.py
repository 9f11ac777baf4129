import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreError
from app.repositories.application_repository import ApplicationRepository
from app.repositories.interfaces import TaskStore
from app.repositories.task_repository import TaskRepository
from app.schemas.common import TaskStatus
from app.schemas.task import TaskRecord

logger = logging.getLogger(__name__)


class SqlTaskStore(TaskStore):
    """:class:`TaskStore` backed by SQLAlchemy.

    Each operation runs in its own session (and transaction) opened from
    *session_factory*.  SQLAlchemy errors are wrapped in
    :class:`StoreError`; configuration errors raised while opening the
    session propagate unchanged.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_application_tenant(self, application_id: str) -> Optional[str]:
        async with self._session_factory() as session:
            try:
                return await ApplicationRepository(session).get_tenant_id(
                    application_id
                )
            except SQLAlchemyError as exc:
                raise StoreError(f"Application lookup failed: {exc}") from exc

    async def insert_task(
        self,
        *,
        application_id: str,
        task_type: str,
        due_at: datetime,
        tenant_id: str,
    ) -> str:
        async with self._session_factory() as session:
            repo = TaskRepository(session)
            try:
                task = await repo.create(
                    application_id=application_id,
                    type=task_type,
                    due_at=due_at,
                    tenant_id=tenant_id,
                    status=TaskStatus.pending.value,
                )
                task_id = task.id
                await repo.commit()
            except SQLAlchemyError as exc:
                await repo.rollback()
                raise StoreError(f"Task insert failed: {exc}") from exc
        return task_id

    async def list_tasks_due_between(
        self, start: datetime, end: datetime
    ) -> List[TaskRecord]:
        async with self._session_factory() as session:
            try:
                tasks = await TaskRepository(session).list_due_between(start, end)
            except SQLAlchemyError as exc:
                raise StoreError(f"Task query failed: {exc}") from exc
            return [TaskRecord.model_validate(task) for task in tasks]

    async def complete_task(self, task_id: str, completed_at: datetime) -> bool:
        async with self._session_factory() as session:
            repo = TaskRepository(session)
            try:
                updated = await repo.mark_completed(task_id, completed_at)
                await repo.commit()
            except SQLAlchemyError as exc:
                await repo.rollback()
                raise StoreError(f"Task update failed: {exc}") from exc
        if not updated:
            logger.info("Task %s was missing or already completed", task_id)
        return updated
