"""Auth dependencies: password hashing, tokens, and the acting account (composition root)."""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import AccountRepository
from app.infrastructure.security.jwt import create_access_token, decode_account_id
from app.infrastructure.security.password import BcryptPasswordHasher
from app.shared.context import ActorContext
from app.shared.telemetry.logging import get_logger

from . import db as db_deps

logger = get_logger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


class AuthSecurity(BcryptPasswordHasher):
    """Token creation and password hashing provided via DI (no direct infra imports in routes)."""

    def create_access_token(
        self, account_id: int, expires_delta: timedelta | None = None
    ) -> str:
        return create_access_token(account_id, expires_delta)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and password hashing (composition root)."""
    return AuthSecurity()


async def get_current_actor(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    account_repo: Annotated[AccountRepository, Depends(db_deps.get_account_repo)],
) -> ActorContext:
    """Resolve the acting account from the bearer token.

    The account must exist, not be soft-deleted, and be active; otherwise 401.
    """
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        account_id = decode_account_id(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise AuthenticationException("Invalid or expired token") from e
    account = await account_repo.get_by_id(account_id, with_trashed=False)
    if account is None or not account.active:
        raise AuthenticationException("Account is not allowed to sign in")
    return ActorContext.for_account(
        account.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
