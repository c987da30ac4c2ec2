"""Security: bearer tokens and password hashing."""

from app.infrastructure.security.jwt import create_access_token, decode_account_id
from app.infrastructure.security.password import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher", "create_access_token", "decode_account_id"]
