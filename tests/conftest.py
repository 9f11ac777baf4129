from datetime import datetime
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.rate_limit import limiter
from app.dependencies import get_clock, get_task_store
from app.main import app
from tests.fakes import DASHBOARD_TZ, FIXED_NOW, InMemoryTaskStore


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    """Keep slowapi out of the way; tests post many requests per minute."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def store() -> InMemoryTaskStore:
    """Store with application A1 owned by tenant T1."""
    return InMemoryTaskStore(applications={"A1": "T1", "A2": "T2"})


@pytest.fixture
def dashboard_tz(monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "DASHBOARD_TIMEZONE", DASHBOARD_TZ)
    return DASHBOARD_TZ


@pytest_asyncio.fixture
async def async_client(
    store: InMemoryTaskStore, fixed_clock
) -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the app with a fake store."""
    app.dependency_overrides[get_task_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
