from fastapi import Depends, Request

from studybuddy.clients.gemini import CompletionClient
from studybuddy.config import Settings
from studybuddy.services.errors import service_unavailable
from studybuddy.services.gateway import TaskGateway


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_api_key(settings: Settings = Depends(get_app_settings)) -> None:
    """Reject task calls up front when no upstream credential is configured."""
    if not settings.has_api_key:
        raise service_unavailable()


def get_completion_client(request: Request) -> CompletionClient | None:
    return request.app.state.completion_client


def get_gateway(
    settings: Settings = Depends(get_app_settings),
    client: CompletionClient | None = Depends(get_completion_client),
) -> TaskGateway:
    return TaskGateway(settings, client)
