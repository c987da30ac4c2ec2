"""Redis keys for cached account representations."""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_ACCOUNT


def account_key(account_id: int) -> str:
    """Cache key for an account by id (account:id:<id>)."""
    if account_id < 1:
        raise ValueError(f"Invalid account id for cache key: {account_id}")
    return f"{CACHE_PREFIX_ACCOUNT}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}{account_id}"
