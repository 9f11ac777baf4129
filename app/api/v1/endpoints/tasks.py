import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.deps import get_task_creation_service, get_today_dashboard
from app.core.config import settings
from app.core.constants import CORS_HEADERS
from app.core.exceptions import InternalError, TaskTrackerError
from app.core.rate_limit import limiter
from app.schemas.common import ErrorResponse
from app.schemas.dashboard import DashboardView
from app.schemas.task import TaskCreateRequest, TaskCreateResponse
from app.services.task_creation_service import TaskCreationService
from app.services.today_dashboard import TodayDashboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.options("")
async def create_task_preflight() -> PlainTextResponse:
    """Answer the CORS preflight before any validation runs."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post(
    "",
    response_model=TaskCreateResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.TASK_CREATE_RATE_LIMIT)
async def create_task(
    request: Request,
    service: TaskCreationService = Depends(get_task_creation_service),
) -> JSONResponse:
    """Create a follow-up task on an application.

    The body is parsed here rather than by FastAPI so that a malformed
    body is reported as ``internal_error`` like every other unexpected
    fault.  Domain errors are mapped to responses by the handlers in
    ``app.main``.
    """
    try:
        payload = await request.json()
        body = TaskCreateRequest.model_validate(payload)
        result = await service.create_task(body)
    except TaskTrackerError:
        raise
    except Exception as exc:
        logger.error("Task creation failed: %s", exc, exc_info=True)
        raise InternalError(str(exc)) from exc

    return JSONResponse(
        content=TaskCreateResponse(**result).model_dump(),
        headers=CORS_HEADERS,
    )


@router.get("/today", response_model=DashboardView)
async def list_today_tasks(
    dashboard: TodayDashboard = Depends(get_today_dashboard),
) -> DashboardView:
    """Return open tasks due today in the dashboard timezone.

    Store failures are reported in the view (``state="failed"``) rather
    than as an HTTP error, matching what the HTML page shows.
    """
    state = await dashboard.reload()
    return state.to_view()


@router.post("/{task_id}/complete", response_model=DashboardView)
async def complete_task(
    task_id: str,
    dashboard: TodayDashboard = Depends(get_today_dashboard),
) -> DashboardView:
    """Complete a task and return the re-fetched view."""
    state = await dashboard.complete(task_id)
    return state.to_view()
