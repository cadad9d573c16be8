"""Versioning context: the acting user and the current HTTP request.

Version rows are stamped with who made a change and from where. The
context is set by the request middleware (or by an auth dependency via
``bind_versioning_user``) and read by the version factory. When no
request is bound the process is considered to be running in console.
"""

from contextvars import ContextVar
from typing import Any


# ContextVar for async-safe versioning context storage
# Each async task/request gets its own isolated context
_versioning_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "versioning_context", default=None
)


def set_versioning_context(
    user_id: Any | None = None,
    url: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    request_id: str | None = None,
) -> None:
    """Bind an HTTP request to the current context.

    Creates a new dict to ensure isolation between concurrent requests.

    Args:
        user_id: Authenticated user ID, if already known
        url: Full request URL
        ip_address: Client IP address
        user_agent: Client user agent
        request_id: Request correlation ID
    """
    _versioning_context.set(
        {
            "in_request": True,
            "user_id": user_id,
            "url": url,
            "ip_address": ip_address,
            "user_agent": user_agent,
            "request_id": request_id,
        }
    )


def bind_versioning_user(user_id: Any | None) -> None:
    """Record the authenticated user on the current context.

    Works both inside a request and in console code (scripts, workers).
    The existing context dict is updated in place so that code sharing
    the request's context sees the user too.

    Args:
        user_id: The acting user's ID, or None to unbind
    """
    ctx = _versioning_context.get()
    if ctx is None:
        _versioning_context.set({"in_request": False, "user_id": user_id})
        return
    ctx["user_id"] = user_id


def clear_versioning_context() -> None:
    """Clear the versioning context after the request completes."""
    _versioning_context.set(None)


def get_versioning_context() -> dict[str, Any]:
    """Get the current versioning context.

    Returns:
        Shallow copy of current context dict, or empty dict if not set
    """
    ctx = _versioning_context.get()
    if ctx is None:
        return {}
    return ctx.copy()


def running_in_console() -> bool:
    """Check whether no HTTP request is bound to the current context."""
    return not get_versioning_context().get("in_request", False)


def get_auth_user_id() -> Any | None:
    """Get the acting user's ID, or None when nobody is authenticated."""
    return get_versioning_context().get("user_id")
