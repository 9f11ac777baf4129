class TaskTrackerError(Exception):
    """Base class for all task-tracker domain exceptions.

    Every subclass carries a machine-readable ``code`` (the value returned
    to API callers under ``"error"``) and the HTTP ``status_code`` it maps
    to.  ``detail`` is for server-side logs only.
    """

    code: str = "internal_error"
    status_code: int = 500

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


# ---------------------------------------------------------------------------
# 400 — caller-correctable input
# ---------------------------------------------------------------------------


class TaskValidationError(TaskTrackerError):
    """Raised when a task creation request fails field validation."""

    status_code = 400


class InvalidTaskTypeError(TaskValidationError):
    """Raised when ``task_type`` is not one of call, email, review."""

    code = "invalid_task_type"

    def __init__(self, detail: str = "Invalid task type"):
        super().__init__(detail)


class InvalidDueAtError(TaskValidationError):
    """Raised when ``due_at`` is unparsable or not in the future."""

    code = "invalid_due_at"

    def __init__(self, detail: str = "Invalid due_at"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------


class NotFoundError(TaskTrackerError):
    status_code = 404
    code = "not_found"


class ApplicationNotFoundError(NotFoundError):
    """Raised when the referenced application does not exist."""

    code = "application not found"

    def __init__(self, detail: str = "Application not found"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# 409
# ---------------------------------------------------------------------------


class InvalidDashboardTransitionError(TaskTrackerError):
    """Raised when the dashboard receives an event its current phase rejects."""

    status_code = 409
    code = "invalid_transition"

    def __init__(self, detail: str = "Invalid dashboard transition"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# 500 — opaque to callers
# ---------------------------------------------------------------------------


class InternalError(TaskTrackerError):
    """Raised for any fault the caller cannot correct.

    The response body is always ``{"error": "internal_error"}``; the
    detail is only written to the server log.
    """

    status_code = 500
    code = "internal_error"

    def __init__(self, detail: str = "Internal error"):
        super().__init__(detail)


class MissingConfigurationError(InternalError):
    """Raised when the store connection secrets are not configured."""

    def __init__(self, detail: str = "Missing environment variables"):
        super().__init__(detail)


class StoreError(InternalError):
    """Raised when a store read or write fails."""

    def __init__(self, detail: str = "Store operation failed"):
        super().__init__(detail)
