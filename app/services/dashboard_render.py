"""Server-side HTML for the today dashboard."""

from html import escape

from app.services.today_dashboard import DashboardPhase, DashboardState

PAGE_TITLE = "Today's Tasks"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<main class="dashboard">
<h1>{title}</h1>
{body}
</main>
</body>
</html>
"""


def _render_task(task) -> str:
    action = escape(f"/dashboard/today/{task.id}/complete", quote=True)
    return (
        '<div class="task" data-task-id="{id}">\n'
        '<span class="task-type">{type}</span>\n'
        '<span class="task-due">Due: {due}</span>\n'
        '<div class="task-application">Application: {application}</div>\n'
        '<div class="task-status">Status: {status}</div>\n'
        '<form method="post" action="{action}">'
        '<button type="submit">Mark Complete</button></form>\n'
        "</div>"
    ).format(
        id=escape(task.id, quote=True),
        type=escape(task.type),
        due=escape(task.due_time),
        application=escape(task.application_id),
        status=escape(task.status),
        action=action,
    )


def render_today_page(state: DashboardState) -> str:
    """Render the full page for the given dashboard state."""
    if state.phase is DashboardPhase.loading:
        body = "<p>Loading tasks...</p>"
    elif state.phase is DashboardPhase.failed:
        body = '<div class="error">Error: {}</div>'.format(escape(state.error or ""))
    elif not state.tasks:
        body = '<p class="empty">No tasks due today.</p>'
    else:
        body = '<div class="tasks">\n{}\n</div>'.format(
            "\n".join(_render_task(task) for task in state.tasks)
        )
    return _PAGE.format(title=escape(PAGE_TITLE), body=body)
