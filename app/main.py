import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.api.v1.router import router as api_v1_router
from app.core.config import settings as app_settings
from app.core.constants import CORS_HEADERS
from app.core.database import dispose_engine
from app.core.exceptions import (
    InternalError,
    NotFoundError,
    TaskTrackerError,
    TaskValidationError,
)
from app.core.rate_limit import limiter
from app.routers import dashboard

# Configure logging
logging.basicConfig(level=app_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled store connections on shutdown."""
    yield
    await dispose_engine()
    logger.info("Store connections closed")


app = FastAPI(
    title="Application Task Tracker",
    description="Follow-up tasks on applications and a dashboard of what is due today",
    version="0.1.0",
    lifespan=lifespan,
)

# Attach rate limiter state so slowapi can find it
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in app_settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router)
app.include_router(dashboard.router)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    logger.debug("[%s] %s %s", request_id, request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "[%s] unhandled exception on %s %s",
            request_id,
            request.method,
            request.url.path,
        )
        raise
    logger.info(
        "[%s] %s %s -> %s",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
    )
    response.headers["X-Request-Id"] = request_id
    return response


def _error_response(exc: TaskTrackerError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code},
        headers=CORS_HEADERS,
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Same body shape and CORS headers as every other task API error."""
    logger.warning("Rate limit exceeded for %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
        headers=CORS_HEADERS,
    )


@app.exception_handler(TaskValidationError)
async def task_validation_handler(request: Request, exc: TaskValidationError):
    logger.warning("Task validation failed: %s", exc.detail)
    return _error_response(exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("Not found: %s", exc.detail)
    return _error_response(exc)


@app.exception_handler(InternalError)
async def internal_error_handler(request: Request, exc: InternalError):
    """Log the full detail; the caller only ever sees ``internal_error``."""
    logger.error(
        "Internal error on %s %s: %s",
        request.method,
        request.url.path,
        exc.detail,
        exc_info=exc,
    )
    return _error_response(exc)


@app.exception_handler(TaskTrackerError)
async def task_tracker_error_handler(request: Request, exc: TaskTrackerError):
    """Any other domain error, e.g. an illegal dashboard transition."""
    logger.error("Unhandled domain error: %s", exc.detail)
    return _error_response(exc)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected/unhandled exceptions.

    Returns a generic 500 response so that raw stack traces are never
    leaked to the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error"},
        headers=CORS_HEADERS,
    )
