"""SlowAPI rate limiter singleton.

There are no user accounts, so limits apply per client IP. The analysis
endpoints are the only throttled routes: they are the ones that may
trigger a paid LLM call.

Usage in route handlers:
    from app.core.limiter import limiter

    @router.post("/analyze")
    @limiter.limit(settings.analyze_rate_limit)
    async def handler(request: Request, ...):
        ...

The `Request` parameter is required by SlowAPI even if the handler doesn't
use it directly; it uses it to extract the key.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=[])
