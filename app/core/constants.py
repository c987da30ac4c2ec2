"""Core constants: account invariants, cache key prefixes, message key prefix."""

# Row 1 is the primordial administrator; it can never be un-confirmed.
PRIMORDIAL_ACCOUNT_ID = 1

# Prefix for localizable exception message keys.
MESSAGE_KEY_PREFIX = "exceptions.backend.access.flower_rates"

# Cache key prefixes (used with :id:<account_id>)
CACHE_PREFIX_ACCOUNT = "account"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Listing defaults (mirrors the admin panel's paginated tables)
DEFAULT_ORDER_BY = "created_at"
DEFAULT_SORT = "desc"
