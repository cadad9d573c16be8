"""Error handling module with RFC 7807 Problem Details."""

from versionable.core.errors.exceptions import (
    InvalidActionForVersionError,
    NoActionForVersionError,
    UnknownVersionableTypeError,
    VersionableError,
    VersionImmutableError,
    VersionNotFoundError,
)
from versionable.core.errors.handlers import (
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "InvalidActionForVersionError",
    "NoActionForVersionError",
    # Handlers
    "ProblemDetail",
    "UnknownVersionableTypeError",
    "VersionImmutableError",
    "VersionNotFoundError",
    "VersionableError",
    "register_exception_handlers",
]
