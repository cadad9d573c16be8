"""Versioning context: acting user and request metadata."""

from versionable.core.context.middleware import (
    VersioningContextMiddleware,
    get_client_ip,
)
from versionable.core.context.state import (
    bind_versioning_user,
    clear_versioning_context,
    get_auth_user_id,
    get_versioning_context,
    running_in_console,
    set_versioning_context,
)


__all__ = [
    # Middleware
    "VersioningContextMiddleware",
    # Context
    "bind_versioning_user",
    "clear_versioning_context",
    "get_auth_user_id",
    "get_client_ip",
    "get_versioning_context",
    "running_in_console",
    "set_versioning_context",
]
