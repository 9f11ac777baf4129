from uuid import uuid4

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.models.base import Base


class Application(Base):
    """Parent business record a task is attached to.

    Owned by an external system; this service only reads ``tenant_id``.
    """

    __tablename__ = "applications"
    id = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    tenant_id = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tasks = relationship("Task", back_populates="application")
