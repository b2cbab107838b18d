from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.application.services.enrichment import EnrichmentGateway
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


def get_enrichment_gateway(request: Request) -> EnrichmentGateway:
    gateway = getattr(request.app.state, "enrichment_gateway", None)
    if gateway is None:
        raise RuntimeError("Enrichment gateway not configured")
    return gateway
