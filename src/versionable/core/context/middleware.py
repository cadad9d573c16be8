"""Request middleware that binds the versioning context.

Captures the full URL, client IP, user agent, request ID and acting
user for every HTTP request so versions created while handling the
request are stamped with them.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from versionable.config import settings
from versionable.core.context.state import (
    clear_versioning_context,
    set_versioning_context,
)


if TYPE_CHECKING:
    from starlette.types import ASGIApp


UserResolver = Callable[[Request], Any | None]


def default_user_resolver(request: Request) -> Any | None:
    """Read the user ID placed on request.state by an auth middleware."""
    return getattr(request.state, "user_id", None)


def get_client_ip(request: Request, trust_forwarded: bool = True) -> str | None:
    """Extract the real client IP from a request.

    Handles X-Forwarded-For header for proxied requests.

    Args:
        request: The incoming request
        trust_forwarded: Whether proxy headers are honored

    Returns:
        The client IP address or None
    """
    if trust_forwarded:
        # X-Forwarded-For can contain multiple IPs; the first is the original client
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    if request.client:
        return request.client.host

    return None


def get_user_agent(request: Request, max_length: int) -> str | None:
    """Get the User-Agent header, truncated to the column limit."""
    user_agent = request.headers.get("User-Agent")
    if user_agent is None:
        return None
    return user_agent[:max_length]


class VersioningContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request metadata for versioning.

    The context is available to the version factory through
    ``get_versioning_context()`` for the whole request and is cleared
    once the response is produced.

    Attributes:
        user_resolver: Callable returning the acting user's ID for a request
    """

    def __init__(
        self,
        app: "ASGIApp",
        user_resolver: UserResolver | None = None,
    ) -> None:
        super().__init__(app)
        self.user_resolver = user_resolver or default_user_resolver

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request with the versioning context bound.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The response from the handler
        """
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )

        set_versioning_context(
            user_id=self.user_resolver(request),
            url=str(request.url),
            ip_address=get_client_ip(request, settings.trust_forwarded_headers),
            user_agent=get_user_agent(request, settings.max_user_agent_length),
            request_id=request_id,
        )

        try:
            return await call_next(request)
        finally:
            clear_versioning_context()
