import datetime as dt

from fastapi import APIRouter, Depends

from studybuddy.api.tasks import router as tasks_router
from studybuddy.config import Settings
from studybuddy.deps import get_app_settings

router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(get_app_settings)):
    """Liveness check. Reports configuration only, never calls the model."""
    endpoints = [
        f"{method} {route.path} - {route.summary}"
        for route in tasks_router.routes
        for method in sorted(route.methods)
    ]
    return {
        "status": f"{settings.APP_TITLE} backend is running!",
        "model": settings.GEMINI_MODEL,
        "hasApiKey": settings.has_api_key,
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "endpoints": endpoints,
    }
