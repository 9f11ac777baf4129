from typing import Dict, FrozenSet

from app.schemas.common import TaskStatus, TaskType

TASK_TYPES: FrozenSet[str] = frozenset(t.value for t in TaskType)
TASK_STATUSES: FrozenSet[str] = frozenset(s.value for s in TaskStatus)

TASK_TYPE_CHECK_CLAUSE: str = (
    f"type IN ({', '.join(repr(t.value) for t in TaskType)})"
)
TASK_STATUS_CHECK_CLAUSE: str = (
    f"status IN ({', '.join(repr(s.value) for s in TaskStatus)})"
)

# Sent on every response of the task creation endpoint, preflight included.
CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}
