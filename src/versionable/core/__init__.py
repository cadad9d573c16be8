"""Core services and cross-cutting concerns."""

from versionable.core.database import Base
from versionable.core.errors import (
    VersionableError,
    register_exception_handlers,
)


__all__ = [
    # Database
    "Base",
    # Errors
    "VersionableError",
    "register_exception_handlers",
]
