from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.core.exceptions import InvalidDashboardTransitionError
from app.core.timeutils import day_window, format_due_time, parse_timestamp
from app.services.today_dashboard import (
    TRANSITIONS,
    DashboardEvent,
    DashboardPhase,
    TodayDashboard,
)
from tests.fakes import FIXED_NOW

NY = ZoneInfo("America/New_York")


def _local(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=NY)


@pytest.fixture
def dashboard(store, fixed_clock) -> TodayDashboard:
    return TodayDashboard(store, clock=fixed_clock, tz=NY)


class TestDayWindow:
    def test_window_is_local_midnight_to_midnight(self):
        start, end = day_window(FIXED_NOW, NY)
        assert start == _local(2026, 3, 10)
        assert end == _local(2026, 3, 11)

    def test_window_uses_local_date_not_utc_date(self):
        # 02:00 UTC on the 11th is still the 10th in New York
        start, _ = day_window(datetime(2026, 3, 11, 2, 0, tzinfo=timezone.utc), NY)
        assert start == _local(2026, 3, 10)

    def test_dst_day_is_23_hours(self):
        start, end = day_window(_local(2026, 3, 8, 12), NY)
        elapsed = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
        assert elapsed == timedelta(hours=23)


class TestFormatDueTime:
    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (0, 0, "12:00 AM"),
            (9, 5, "9:05 AM"),
            (12, 30, "12:30 PM"),
            (23, 59, "11:59 PM"),
        ],
    )
    def test_twelve_hour_clock(self, hour, minute, expected):
        assert format_due_time(_local(2026, 3, 10, hour, minute), NY) == expected

    def test_converts_to_display_zone(self):
        assert format_due_time(FIXED_NOW, NY) == "11:00 AM"


class TestParseTimestamp:
    def test_date_only_is_utc_midnight(self):
        assert parse_timestamp("2026-10-20") == datetime(
            2026, 10, 20, tzinfo=timezone.utc
        )

    def test_offset_is_kept(self):
        parsed = parse_timestamp("2026-10-20T09:30:00+02:00")
        assert parsed == datetime(2026, 10, 20, 7, 30, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        assert parse_timestamp("2026-10-20T09:30:00Z").utcoffset() == timedelta(0)

    def test_naive_date_time_is_local(self):
        parsed = parse_timestamp("2026-10-20T09:30:00")
        assert parsed.tzinfo is not None
        assert parsed.replace(tzinfo=None) == datetime(2026, 10, 20, 9, 30)


class TestFetchBoundaries:
    @pytest.mark.asyncio
    async def test_half_open_window(self, dashboard, store):
        store.add_task(
            application_id="A1", task_type="call", due_at=_local(2026, 3, 9, 23, 59)
        )
        included = store.add_task(
            application_id="A1", task_type="email", due_at=_local(2026, 3, 10)
        )
        store.add_task(
            application_id="A1", task_type="review", due_at=_local(2026, 3, 11)
        )

        state = await dashboard.reload()

        assert state.phase is DashboardPhase.ready
        assert [task.id for task in state.tasks] == [included.id]

    @pytest.mark.asyncio
    async def test_orders_by_due_time_and_skips_completed(self, dashboard, store):
        late = store.add_task(
            application_id="A1", task_type="call", due_at=_local(2026, 3, 10, 16)
        )
        early = store.add_task(
            application_id="A2", task_type="email", due_at=_local(2026, 3, 10, 8, 15)
        )
        store.add_task(
            application_id="A1",
            task_type="review",
            due_at=_local(2026, 3, 10, 12),
            status="completed",
        )

        state = await dashboard.reload()

        assert [task.id for task in state.tasks] == [early.id, late.id]
        assert state.tasks[0].due_time == "8:15 AM"
        assert state.tasks[0].application_id == "A2"
        assert state.tasks[0].status == "pending"

    @pytest.mark.asyncio
    async def test_fetch_failure_sets_raw_message(self, dashboard, store):
        store.fail_on.add("list_tasks_due_between")
        store.fail_with = ConnectionError("connection refused")

        state = await dashboard.reload()

        assert state.phase is DashboardPhase.failed
        assert state.error == "connection refused"
        assert state.tasks == ()

    @pytest.mark.asyncio
    async def test_empty_message_falls_back(self, dashboard, store):
        store.fail_on.add("list_tasks_due_between")
        store.fail_with = RuntimeError()

        state = await dashboard.reload()
        assert state.error == "Failed to fetch tasks"


class TestCompletion:
    @pytest.mark.asyncio
    async def test_completed_task_disappears_after_refetch(
        self, dashboard, store, fixed_clock
    ):
        task = store.add_task(
            application_id="A1", task_type="call", due_at=_local(2026, 3, 10, 14)
        )
        await dashboard.reload()

        state = await dashboard.complete(task.id)

        assert state.phase is DashboardPhase.ready
        assert state.tasks == ()
        assert store.tasks[task.id].status == "completed"
        assert store.tasks[task.id].completed_at == fixed_clock()
        assert store.calls[-2:] == ["complete_task", "list_tasks_due_between"]

        again = await dashboard.reload()
        assert task.id not in [t.id for t in again.tasks]

    @pytest.mark.asyncio
    async def test_double_completion_is_harmless(self, dashboard, store):
        task = store.add_task(
            application_id="A1", task_type="call", due_at=_local(2026, 3, 10, 14)
        )
        first = await dashboard.complete(task.id)
        second = await dashboard.complete(task.id)

        assert first.phase is DashboardPhase.ready
        assert second.phase is DashboardPhase.ready
        assert store.tasks[task.id].status == "completed"

    @pytest.mark.asyncio
    async def test_update_failure_skips_refetch(self, dashboard, store):
        task = store.add_task(
            application_id="A1", task_type="call", due_at=_local(2026, 3, 10, 14)
        )
        await dashboard.reload()
        store.fail_on.add("complete_task")
        store.fail_with = PermissionError("permission denied for table tasks")

        state = await dashboard.complete(task.id)

        assert state.phase is DashboardPhase.failed
        assert state.error == "permission denied for table tasks"
        assert store.calls[-1] == "complete_task"
        assert store.tasks[task.id].status == "pending"

    @pytest.mark.asyncio
    async def test_reload_recovers_from_failure(self, dashboard, store):
        store.fail_on.add("list_tasks_due_between")
        assert (await dashboard.reload()).phase is DashboardPhase.failed

        store.fail_on.clear()
        assert (await dashboard.reload()).phase is DashboardPhase.ready


class TestTransitionTable:
    def test_initial_phase_is_loading(self, dashboard):
        assert dashboard.state.phase is DashboardPhase.loading

    def test_ready_only_reached_from_loading(self):
        sources = {
            phase
            for (phase, _), target in TRANSITIONS.items()
            if target is DashboardPhase.ready
        }
        assert sources == {DashboardPhase.loading}

    def test_loaded_outside_loading_is_rejected(self, dashboard):
        dashboard._apply(DashboardEvent.failed, error="boom")
        with pytest.raises(InvalidDashboardTransitionError):
            dashboard._apply(DashboardEvent.loaded)

    def test_every_phase_can_reload(self):
        for phase in DashboardPhase:
            assert TRANSITIONS[(phase, DashboardEvent.reload)] is DashboardPhase.loading
