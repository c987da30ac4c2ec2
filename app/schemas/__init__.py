"""Pydantic request/response schemas for the API."""

from app.schemas.account import (
    AccountCreateRequest,
    AccountPageResponse,
    AccountPasswordRequest,
    AccountResponse,
    AccountUpdateRequest,
)
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountPageResponse",
    "AccountPasswordRequest",
    "AccountResponse",
    "AccountUpdateRequest",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
