"""
Rate Limit Middleware

Offers every inbound request to the application's global
SlidingWindowRateLimiter before routing. Rejected requests never reach an
endpoint or the registry and get a plain-text 429 response.
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shortener.core.rate_limit import RATE_LIMIT_MESSAGE, SlidingWindowRateLimiter


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Gate all requests through the limiter stored on app.state."""

    async def dispatch(self, request: Request, call_next):
        limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter

        result = limiter.check_request()
        if not result.allowed:
            return PlainTextResponse(
                RATE_LIMIT_MESSAGE,
                status_code=429,
                headers={"Retry-After": str(result.retry_after)},
            )

        return await call_next(request)


def add_rate_limit_middleware(app: FastAPI) -> None:
    """
    Add the global rate limit middleware to FastAPI app.

    Must be added before add_logging_middleware so the logging middleware
    wraps it and records rejected requests.
    """
    app.add_middleware(RateLimitMiddleware)
