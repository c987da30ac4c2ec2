"""Bearer tokens for the admin API: the subject claim is the acting account id."""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings


def create_access_token(
    account_id: int,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed JWT for account_id.

    Args:
        account_id: Account the token authenticates (stored as sub).
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
        extra_claims: Additional claims to embed.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims["sub"] = str(account_id)
    claims["exp"] = datetime.now(UTC) + ttl
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_account_id(token: str) -> int:
    """Verify token and return the account id from its sub claim.

    Raises:
        ValueError: If the token is invalid, expired, or sub is not an account id.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        raise ValueError("Token subject is not an account id")
    return int(subject)
