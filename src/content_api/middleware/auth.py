"""API key authentication middleware."""

import secrets
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

API_KEY_HEADER = "X-API-Key"

PUBLIC_PATHS = frozenset(
    {
        "/api/v1/health/live",
    }
)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require a shared API key on every non-public path.

    CORS preflight requests pass through so browsers can negotiate before
    sending the key.
    """

    def __init__(self, app: Callable[..., Awaitable[Response]], api_key: str) -> None:
        """Initialize middleware with API key.

        Args:
            app: ASGI application.
            api_key: Expected API key value.
        """
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Validate API key for non-public endpoints.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            HTTP response, or 401 if authentication fails.
        """
        if request.method == "OPTIONS" or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        provided_key = request.headers.get(API_KEY_HEADER, "")
        if not provided_key:
            logger.warning("api_key_missing", path=request.url.path)
            return JSONResponse(
                status_code=401,
                content={"error": f"Missing {API_KEY_HEADER} header"},
            )

        if not secrets.compare_digest(provided_key, self._api_key):
            logger.warning("api_key_invalid", path=request.url.path)
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid API key"},
            )

        return await call_next(request)
