"""SlowAPI rate limiter singleton.

Detection is unauthenticated, so limits are keyed on the client address.
Every detection fans out into a dozen calls against public hosting APIs
that rate-limit us by IP, which is why the endpoint needs its own cap.

Usage in route handlers:
    @router.post("/detect")
    @limiter.limit(get_settings().detect_rate_limit)
    async def handler(request: Request, ...):
        ...

The `Request` parameter is required by SlowAPI even if the handler doesn't
use it directly.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=[])
