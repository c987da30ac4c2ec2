"""SlowAPI limiter shared by create_app() and the account routes.

Mutating account routes are throttled per client address. RATE_LIMIT_ENABLED=false
turns the limiter off (tests, trusted internal deployments).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

WRITE_ENDPOINT_LIMIT = "120/minute"

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
