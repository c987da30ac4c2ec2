"""FlowerRate account administration service.

Run with: uvicorn app.main:app. create_app() reads settings when called, so
tests configure the environment before importing this module.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.infrastructure.messaging.event_bus import InProcessEventBus
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.services.account_notification_service import (
    LogOnlyAccountNotifier,
)
from app.infrastructure.services.account_subscribers import (
    register_account_subscribers,
)
from app.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from app.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build the account API application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # Event bus and notifier live for the whole process; lifespan adds the
    # cache subscriber once Redis is connected.
    app.state.event_bus = InProcessEventBus()
    app.state.notifier = LogOnlyAccountNotifier()
    app.state.cache = None
    register_account_subscribers(app.state.event_bus, get_session_factory())

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter

    register_exception_handlers(app)

    # Middleware: first added = innermost. Order (outer → inner): request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
