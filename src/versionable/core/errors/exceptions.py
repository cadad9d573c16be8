"""Versioning exceptions.

These exceptions represent misuse of the versioning API or lookups that
failed. When raised inside a FastAPI request they are converted to
RFC 7807 Problem Details responses by the exception handlers.
"""

from typing import Any


class VersionableError(Exception):
    """Base exception for all versioning errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected versioning error occurred"
    error_code: str = "versioning_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidActionForVersionError(VersionableError):
    """Raised when an unknown action is set on a version factory.

    Example:
        raise InvalidActionForVersionError(details={"action": "archive"})
    """

    message = "The action for this version informed is invalid"
    error_code = "invalid_version_action"

    def __init__(
        self,
        message: str | None = None,
        action: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if action is not None:
            details["action"] = action
        super().__init__(message=message, details=details, **kwargs)


class NoActionForVersionError(VersionableError):
    """Raised when a version is requested before an action was set."""

    message = "An action should be set before creating a new version"
    error_code = "missing_version_action"


class VersionNotFoundError(VersionableError):
    """Raised when a requested version does not exist.

    Example:
        raise VersionNotFoundError(version_id=str(version_id))
    """

    message = "Version not found"
    error_code = "version_not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        version_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if version_id:
            details["version_id"] = version_id
        super().__init__(message=message, details=details, **kwargs)


class VersionImmutableError(VersionableError):
    """Raised when a persisted version is modified."""

    message = "Versions are immutable once created"
    error_code = "version_immutable"
    status_code = 409


class UnknownVersionableTypeError(VersionableError):
    """Raised when a version's owner type maps to no mapped class."""

    message = "No versionable model is registered for this type"
    error_code = "unknown_versionable_type"

    def __init__(
        self,
        message: str | None = None,
        versionable_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if versionable_type:
            details["versionable_type"] = versionable_type
        super().__init__(message=message, details=details, **kwargs)
