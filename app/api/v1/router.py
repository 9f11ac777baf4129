from fastapi import APIRouter

from app.api.v1.endpoints import tasks, health

router = APIRouter(prefix="/api/v1")

router.include_router(tasks.router)
router.include_router(health.router)
