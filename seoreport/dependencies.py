"""Request-scoped access to the clients created at start-up.

Routers depend on these functions rather than on module-level singletons,
so tests can swap any of them through ``app.dependency_overrides``.
"""

from typing import List

from anthropic import Anthropic
from fastapi import Request

from seoreport.config import Settings
from seoreport.services.assistant import AnthropicProvider, Provider
from seoreport.services.fetcher import PageFetcher
from seoreport.services.store import ReportStore


def build_providers(settings: Settings) -> List[Provider]:
    """Return the assistant providers in the order they should be tried."""
    providers: List[Provider] = []
    if settings.anthropic_api_key:
        providers.append(
            AnthropicProvider(
                Anthropic(api_key=settings.anthropic_api_key),
                model=settings.anthropic_model,
                max_tokens=settings.ai_max_tokens,
            )
        )
    return providers


def get_fetcher(request: Request) -> PageFetcher:
    return request.app.state.fetcher


def get_store(request: Request) -> ReportStore:
    return request.app.state.store


def get_providers(request: Request) -> List[Provider]:
    return request.app.state.providers
