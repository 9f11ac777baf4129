from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.deps import get_today_dashboard
from app.services.dashboard_render import render_today_page
from app.services.today_dashboard import DashboardPhase, TodayDashboard

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/today", response_class=HTMLResponse)
async def today_page(
    dashboard: TodayDashboard = Depends(get_today_dashboard),
) -> HTMLResponse:
    state = await dashboard.reload()
    return HTMLResponse(render_today_page(state))


@router.post("/today/{task_id}/complete", response_class=HTMLResponse)
async def complete_from_page(
    task_id: str,
    dashboard: TodayDashboard = Depends(get_today_dashboard),
):
    """Handle the "Mark Complete" form.

    On success the browser is sent back to the list (post/redirect/get);
    on failure the error page is rendered directly.
    """
    state = await dashboard.complete(task_id)
    if state.phase is DashboardPhase.failed:
        return HTMLResponse(render_today_page(state))
    return RedirectResponse(url="/dashboard/today", status_code=303)
