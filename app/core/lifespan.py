"""Startup and shutdown of the infrastructure behind the account API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the account cache and tracing, then tear them down in reverse.

    The cache also subscribes to lifecycle events so a mutated account is
    evicted. The SQL engine is disposed last.
    """
    settings = get_settings()

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService
        from app.infrastructure.services.account_subscribers import (
            register_cache_invalidation,
        )

        cache = CacheService.from_settings(settings)
        await cache.connect()
        app.state.cache = cache
        register_cache_invalidation(app.state.event_bus, cache)
    else:
        app.state.cache = None

    if settings.telemetry_enabled:
        from app.infrastructure.persistence.database import get_engine
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup(
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        attached = telemetry.instrument(
            app, get_engine(), redis=settings.redis_enabled
        )
        logger.info("Telemetry initialized (%s)", ", ".join(attached) or "nothing instrumented")

    yield

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None
        logger.info("Cache disconnected")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from app.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
    logger.info("Database engine disposed")
