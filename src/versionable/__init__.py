"""Automatic change-versioning for SQLAlchemy models."""

from versionable.constants import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_RESTORE,
    ACTION_SOFT_DELETE,
    ACTION_UPDATE,
    VERSION_ACTIONS,
)
from versionable.core.context import (
    VersioningContextMiddleware,
    bind_versioning_user,
    clear_versioning_context,
    get_versioning_context,
    set_versioning_context,
)
from versionable.core.database import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin
from versionable.core.errors import (
    InvalidActionForVersionError,
    NoActionForVersionError,
    UnknownVersionableTypeError,
    VersionableError,
    VersionImmutableError,
    VersionNotFoundError,
)
from versionable.extension import setup_versioning
from versionable.versioning import (
    CreatedVersion,
    CreatingVersion,
    Version,
    VersionableMixin,
    VersionFactory,
    VersionService,
    created_version,
    creating_version,
    remove_versioning_listeners,
    setup_versioning_listeners,
    versioning_disabled,
)


__version__ = "0.1.0"

__all__ = [
    # Actions
    "ACTION_CREATE",
    "ACTION_DELETE",
    "ACTION_RESTORE",
    "ACTION_SOFT_DELETE",
    "ACTION_UPDATE",
    "VERSION_ACTIONS",
    # Database
    "Base",
    # Signals
    "CreatedVersion",
    "CreatingVersion",
    # Errors
    "InvalidActionForVersionError",
    "NoActionForVersionError",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
    "UnknownVersionableTypeError",
    # Versioning
    "Version",
    "VersionFactory",
    "VersionImmutableError",
    "VersionNotFoundError",
    "VersionService",
    "VersionableError",
    "VersionableMixin",
    # Context
    "VersioningContextMiddleware",
    "bind_versioning_user",
    "clear_versioning_context",
    "created_version",
    "creating_version",
    "get_versioning_context",
    "remove_versioning_listeners",
    "set_versioning_context",
    "setup_versioning",
    "setup_versioning_listeners",
    "versioning_disabled",
]
