from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.constants import TASK_STATUS_CHECK_CLAUSE, TASK_TYPE_CHECK_CLAUSE
from app.models.base import Base


class Task(Base):
    """Follow-up action (call, email or review) due on an application.

    ``tenant_id`` is always copied from the owning application at insert
    time.  ``status`` only moves from ``pending`` to ``completed``, and
    ``completed_at`` is written in the same update.
    """

    __tablename__ = "tasks"
    id = Column(String(64), primary_key=True, default=lambda: str(uuid4()))
    application_id = Column(
        String(64), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False
    )
    type = Column(String(20), nullable=False)
    due_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, server_default="pending")
    tenant_id = Column(String(64), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    application = relationship("Application", back_populates="tasks")

    __table_args__ = (
        Index("idx_tasks_due_at_status", "due_at", "status"),
        CheckConstraint(TASK_TYPE_CHECK_CLAUSE, name="ck_task_type"),
        CheckConstraint(TASK_STATUS_CHECK_CLAUSE, name="ck_task_status"),
    )
