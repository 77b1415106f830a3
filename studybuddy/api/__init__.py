from fastapi import APIRouter

from studybuddy.api.health import router as health_router
from studybuddy.api.tasks import router as tasks_router

api_router = APIRouter()
api_router.include_router(tasks_router, tags=["tasks"])
api_router.include_router(health_router, tags=["health"])
