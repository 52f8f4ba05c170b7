"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Only exam writes are limited; reads are
served from the query cache.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    # Read from settings per request (tests override WRITE_RATE_LIMIT).
    from app.core.config import get_settings

    return get_settings().write_rate_limit


limit_writes = limiter.limit(_write_limit)
