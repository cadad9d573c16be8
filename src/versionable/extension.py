"""Entry point wiring versioning into an application."""

from fastapi import FastAPI

from versionable.core.context import VersioningContextMiddleware
from versionable.core.context.middleware import UserResolver
from versionable.core.errors import register_exception_handlers
from versionable.core.logging import configure_logging
from versionable.versioning.listeners import setup_versioning_listeners


def setup_versioning(
    app: FastAPI | None = None,
    *,
    configure_logs: bool = False,
    user_resolver: UserResolver | None = None,
) -> None:
    """Enable automatic versioning.

    Installs the session listeners. When an app is given, also adds the
    request context middleware and the Problem Details exception handler.
    Scripts and workers call it without an app; their versions are
    recorded as console versions.

    Args:
        app: FastAPI application to integrate with
        configure_logs: Whether to configure structlog from settings
        user_resolver: Callable returning the acting user's ID for a request

    Example:
        app = FastAPI()
        setup_versioning(app, user_resolver=lambda r: r.state.user_id)
    """
    if configure_logs:
        configure_logging()

    setup_versioning_listeners()

    if app is not None:
        app.add_middleware(VersioningContextMiddleware, user_resolver=user_resolver)
        register_exception_handlers(app)
