import logging
from datetime import datetime
from typing import Callable, Dict, Any

from app.core.constants import TASK_TYPES
from app.core.exceptions import (
    ApplicationNotFoundError,
    InvalidDueAtError,
    InvalidTaskTypeError,
)
from app.core.timeutils import parse_timestamp, utcnow
from app.repositories.interfaces import TaskStore
from app.schemas.task import TaskCreateRequest

logger = logging.getLogger(__name__)


class TaskCreationService:
    """Validates a creation request and persists the new task.

    Checks run in a fixed order and the first failure is raised:
    task type, then due time, then the application lookup.  Nothing is
    written unless all three pass.
    """

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._clock = clock

    async def create_task(self, request: TaskCreateRequest) -> Dict[str, Any]:
        # 1. Task type
        task_type = request.task_type
        if not isinstance(task_type, str) or task_type not in TASK_TYPES:
            raise InvalidTaskTypeError(f"Unsupported task type: {request.task_type!r}")

        # 2. Due time
        due_at = self._validate_due_at(request.due_at)

        # 3. Owning application (tenant is taken from here, never the body)
        tenant_id = None
        if isinstance(request.application_id, str):
            tenant_id = await self._store.get_application_tenant(
                request.application_id
            )
        if tenant_id is None:
            raise ApplicationNotFoundError(
                f"Application {request.application_id!r} not found"
            )

        task_id = await self._store.insert_task(
            application_id=request.application_id,
            task_type=request.task_type,
            due_at=due_at,
            tenant_id=tenant_id,
        )
        logger.info(
            "Created %s task %s for application %s (tenant %s)",
            request.task_type,
            task_id,
            request.application_id,
            tenant_id,
        )
        return {"success": True, "task_id": task_id}

    def _validate_due_at(self, raw: Any) -> datetime:
        if not raw or not isinstance(raw, str):
            raise InvalidDueAtError(f"due_at must be a timestamp string: {raw!r}")
        try:
            due_at = parse_timestamp(raw)
        except ValueError as exc:
            raise InvalidDueAtError(f"Unparsable due_at: {raw!r}") from exc
        if due_at <= self._clock():
            raise InvalidDueAtError(f"due_at {raw!r} is not in the future")
        return due_at
