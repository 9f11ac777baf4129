from typing import Optional

from sqlalchemy import select

from app.models.application import Application
from app.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository):
    """Read-only access to the ``applications`` table."""

    async def get_tenant_id(self, application_id: str) -> Optional[str]:
        """Return the owning tenant of an application, or ``None``."""
        result = await self._db.execute(
            select(Application.tenant_id).where(Application.id == application_id)
        )
        return result.scalar_one_or_none()
