from app.models.base import Base
from app.models.application import Application
from app.models.task import Task

__all__ = [
    "Base",
    "Application",
    "Task",
]
