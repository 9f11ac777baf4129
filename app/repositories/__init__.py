"""Repository layer – all database access goes through here.

Repositories encapsulate SQLAlchemy queries so that the service layer
only contains business logic.  Services depend on the
:class:`TaskStore` interface; :class:`SqlTaskStore` is its SQL
implementation built from the repositories below.
"""

from app.repositories.application_repository import ApplicationRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.interfaces import TaskStore
from app.repositories.sql_store import SqlTaskStore

__all__ = [
    "ApplicationRepository",
    "TaskRepository",
    "TaskStore",
    "SqlTaskStore",
]
