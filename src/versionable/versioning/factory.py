"""Version factory: the gate between lifecycle events and version rows.

Each versionable instance owns one factory. The lifecycle listeners set
the pending action; ``create_new_version`` then runs the veto checks and
writes the snapshot.
"""

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete
from sqlalchemy.orm import Session

from versionable.config import settings
from versionable.constants import VERSION_ACTIONS
from versionable.core.context import (
    get_auth_user_id,
    get_versioning_context,
    running_in_console,
)
from versionable.core.errors import (
    InvalidActionForVersionError,
    NoActionForVersionError,
)
from versionable.versioning.models import Version
from versionable.versioning.signals import (
    CreatedVersion,
    CreatingVersion,
    dispatch_created_version,
    dispatch_creating_version,
)


if TYPE_CHECKING:
    from versionable.versioning.mixins import VersionableMixin


log = structlog.get_logger()


class VersionFactory:
    """Holds the pending action for a versionable and creates its versions.

    Usage:
        factory = VersionFactory(article)
        version = factory.set_action(ACTION_UPDATE).create_new_version(session)
    """

    def __init__(self, versionable: "VersionableMixin") -> None:
        self.versionable = versionable
        self.action: str | None = None

    def set_action(self, action: str) -> "VersionFactory":
        """Set the action being performed.

        Args:
            action: One of the version action tags

        Returns:
            This factory

        Raises:
            InvalidActionForVersionError: If the action is unknown
        """
        if action not in VERSION_ACTIONS:
            raise InvalidActionForVersionError(action=action)

        self.action = action
        return self

    def reset_action(self) -> "VersionFactory":
        """Reset the current action being performed."""
        self.action = None
        return self

    def has_action(self) -> bool:
        """Check if an action is set."""
        return self.action is not None

    def create_new_version(self, session: Session) -> Version | None:
        """Create a new version of the model for the pending action.

        The version is added to the session; it is written by the next
        flush. The pending action is reset whatever the outcome.

        Args:
            session: Session the version is added to

        Returns:
            The new version, or None if a receiver or the model vetoed it

        Raises:
            NoActionForVersionError: If no action was set
        """
        action = self.action
        if action is None:
            raise NoActionForVersionError()

        versionable_type, versionable_id = self.versionable.versionable_key()

        if not dispatch_creating_version(CreatingVersion(self.versionable, action)):
            log.info(
                "version_vetoed",
                versionable_type=versionable_type,
                versionable_id=versionable_id,
                action=action,
            )
            self.reset_action()
            return None

        if not self.versionable.should_create_new_version(action):
            log.debug(
                "version_not_warranted",
                versionable_type=versionable_type,
                versionable_id=versionable_id,
                action=action,
            )
            self.reset_action()
            return None

        version = Version(
            versionable_type=versionable_type,
            versionable_id=versionable_id,
            user_id=self._get_auth_user_id(),
            action=action,
            reason=self.versionable.get_versioning_reason(),
            url=self._get_request_url(),
            ip_address=self._get_request_ip(),
            user_agent=self._get_request_user_agent(),
            model_data=self.versionable.serialized_attributes_for_versioning(),
            additional_data=self.versionable.serialized_additional_data_for_versioning(),
        )
        session.add(version)

        dispatch_created_version(CreatedVersion(self.versionable, action, version))

        log.info(
            "version_created",
            versionable_type=versionable_type,
            versionable_id=versionable_id,
            action=action,
            user_id=version.user_id,
        )

        self.reset_action()
        return version

    def purge_versions(self, session: Session) -> int:
        """Delete all versions of the model.

        Args:
            session: Session the bulk delete is executed on

        Returns:
            Number of deleted versions
        """
        versionable_type, versionable_id = self.versionable.versionable_key()

        result = session.execute(
            delete(Version).where(
                Version.versionable_type == versionable_type,
                Version.versionable_id == versionable_id,
            )
        )
        deleted: int = result.rowcount  # type: ignore[attr-defined]

        log.info(
            "versions_purged",
            versionable_type=versionable_type,
            versionable_id=versionable_id,
            count=deleted,
        )

        self.reset_action()
        return deleted

    def _get_auth_user_id(self) -> str | None:
        user_id: Any | None = get_auth_user_id()
        if user_id is None:
            return None
        return str(user_id)

    def _get_request_url(self) -> str:
        if running_in_console():
            return settings.console_url
        return get_versioning_context().get("url") or settings.console_url

    def _get_request_ip(self) -> str | None:
        if running_in_console():
            return None
        return get_versioning_context().get("ip_address")

    def _get_request_user_agent(self) -> str | None:
        if running_in_console():
            return None
        user_agent = get_versioning_context().get("user_agent")
        if user_agent is None:
            return None
        return user_agent[: settings.max_user_agent_length]
