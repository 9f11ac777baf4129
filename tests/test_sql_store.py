from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import MissingConfigurationError, StoreError
from app.repositories.sql_store import SqlTaskStore

DUE_AT = datetime(2026, 3, 11, 9, 0, tzinfo=timezone.utc)


def _make_session() -> AsyncMock:
    session = AsyncMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    session.add = MagicMock()
    return session


def _store_for(session) -> SqlTaskStore:
    return SqlTaskStore(session_factory=MagicMock(return_value=session))


def _db_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("server closed the connection"))


class TestApplicationLookup:
    @pytest.mark.asyncio
    async def test_returns_tenant(self):
        session = _make_session()
        result = MagicMock()
        result.scalar_one_or_none.return_value = "T1"
        session.execute = AsyncMock(return_value=result)

        assert await _store_for(session).get_application_tenant("A1") == "T1"

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped(self):
        session = _make_session()
        session.execute = AsyncMock(side_effect=_db_error())

        with pytest.raises(StoreError):
            await _store_for(session).get_application_tenant("A1")

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self):
        factory = MagicMock(side_effect=MissingConfigurationError())

        with pytest.raises(MissingConfigurationError):
            await SqlTaskStore(session_factory=factory).get_application_tenant("A1")


class TestInsertTask:
    @pytest.mark.asyncio
    async def test_insert_commits_and_returns_generated_id(self):
        session = _make_session()

        async def _flush():
            session.add.call_args.args[0].id = "generated-id"

        session.flush = AsyncMock(side_effect=_flush)

        task_id = await _store_for(session).insert_task(
            application_id="A1", task_type="call", due_at=DUE_AT, tenant_id="T1"
        )

        assert task_id == "generated-id"
        added = session.add.call_args.args[0]
        assert added.tenant_id == "T1"
        assert added.status == "pending"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back(self):
        session = _make_session()
        session.flush = AsyncMock(side_effect=_db_error())

        with pytest.raises(StoreError):
            await _store_for(session).insert_task(
                application_id="A1", task_type="call", due_at=DUE_AT, tenant_id="T1"
            )

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()


class TestCompleteTask:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount,expected", [(1, True), (0, False)])
    async def test_reports_whether_row_changed(self, rowcount, expected):
        session = _make_session()
        session.execute = AsyncMock(return_value=MagicMock(rowcount=rowcount))

        result = await _store_for(session).complete_task("task-1", DUE_AT)

        assert result is expected
        session.commit.assert_awaited_once()
