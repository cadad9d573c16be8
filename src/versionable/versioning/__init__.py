"""Automatic versioning of model changes.

Provides:
- Version model for storing snapshots
- VersionableMixin for models that should be versioned
- VersionFactory gating version creation
- Automatic capture via SQLAlchemy event listeners
- VersionService for querying and purging history
"""

from versionable.versioning.factory import VersionFactory
from versionable.versioning.listeners import (
    remove_versioning_listeners,
    setup_versioning_listeners,
    versioning_disabled,
)
from versionable.versioning.mixins import VersionableMixin, resolve_versionable_class
from versionable.versioning.models import Version
from versionable.versioning.service import VersionService
from versionable.versioning.signals import (
    CreatedVersion,
    CreatingVersion,
    created_version,
    creating_version,
)


__all__ = [
    "CreatedVersion",
    "CreatingVersion",
    "Version",
    "VersionFactory",
    "VersionService",
    "VersionableMixin",
    "created_version",
    "creating_version",
    "remove_versioning_listeners",
    "resolve_versionable_class",
    "setup_versioning_listeners",
    "versioning_disabled",
]
