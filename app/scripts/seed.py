"""Sample data for local development: a few applications and today's tasks."""

import asyncio
from datetime import datetime, timedelta

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.timeutils import day_window, resolve_timezone, utcnow
from app.models import Application, Task
from app.schemas.common import TaskStatus, TaskType

APPLICATIONS = [
    ("app-1001", "tenant-north"),
    ("app-1002", "tenant-north"),
    ("app-2001", "tenant-south"),
]
TASK_TYPES = [t.value for t in TaskType]


def _today_slots(start: datetime) -> list:
    """Due times spread over the working day, 09:00 to 17:00."""
    return [start + timedelta(hours=hour) for hour in (9, 11, 14, 17)]


async def seed():
    engine = create_async_engine(settings.database_url(), echo=False)
    session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_maker() as session:
        print("Seeding sample applications and tasks")

        await session.execute(text("TRUNCATE TABLE tasks, applications CASCADE"))
        await session.commit()
        print("Cleared existing data")

        session.add_all(
            Application(id=app_id, tenant_id=tenant_id)
            for app_id, tenant_id in APPLICATIONS
        )
        await session.flush()
        print(f"Created {len(APPLICATIONS)} applications")

        start, _ = day_window(utcnow(), resolve_timezone(settings.DASHBOARD_TIMEZONE))
        tasks = []
        for i, due_at in enumerate(_today_slots(start)):
            app_id, tenant_id = APPLICATIONS[i % len(APPLICATIONS)]
            tasks.append(
                Task(
                    application_id=app_id,
                    tenant_id=tenant_id,
                    type=TASK_TYPES[i % len(TASK_TYPES)],
                    due_at=due_at,
                    status=TaskStatus.pending.value,
                )
            )
        # One for tomorrow so the dashboard window is visible
        tasks.append(
            Task(
                application_id=APPLICATIONS[0][0],
                tenant_id=APPLICATIONS[0][1],
                type=TaskType.review.value,
                due_at=start + timedelta(days=1, hours=10),
                status=TaskStatus.pending.value,
            )
        )
        session.add_all(tasks)
        await session.commit()
        print(f"Created {len(tasks)} tasks")

        task_cnt = (await session.execute(select(func.count(Task.id)))).scalar()
        print(f"\nValidation:\n  Tasks: {task_cnt}")
        print("Seeding complete")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
