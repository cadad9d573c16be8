"""Version service for querying and maintaining version history.

Provides an async API over ``AsyncSession`` next to the automatic
capture done by the lifecycle listeners.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from versionable.core.errors import VersionNotFoundError
from versionable.versioning.mixins import VersionableMixin
from versionable.versioning.models import Version


class VersionService:
    """Service for reading, creating and purging versions.

    Usage:
        service = VersionService(session)
        versions = await service.list_versions(article, limit=10)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize version service.

        Args:
            session: Database session
        """
        self.session = session

    async def list_versions(
        self,
        versionable: VersionableMixin,
        limit: int | None = None,
    ) -> list[Version]:
        """List a model's versions, newest first.

        Args:
            versionable: The versioned model instance
            limit: Maximum number of versions to return

        Returns:
            The model's versions
        """
        # Versions created by the last flush are still pending
        await self.session.flush()

        statement = versionable.versions_query()
        if limit is not None:
            statement = statement.limit(limit)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def latest_version(self, versionable: VersionableMixin) -> Version | None:
        """Get a model's most recent version, if any."""
        versions = await self.list_versions(versionable, limit=1)
        return versions[0] if versions else None

    async def get_version(self, version_id: UUID) -> Version:
        """Get a version by ID.

        Raises:
            VersionNotFoundError: If no version has this ID
        """
        version = await self.session.get(Version, version_id)
        if version is None:
            raise VersionNotFoundError(version_id=str(version_id))
        return version

    async def create_version(
        self,
        versionable: VersionableMixin,
        action: str,
        reason: str | None = None,
    ) -> Version | None:
        """Create a version explicitly.

        The version goes through the same checks as automatic ones:
        signal receivers and the model may still veto it.

        Args:
            versionable: The versioned model instance
            action: One of the version action tags
            reason: Optional reason recorded on the version

        Returns:
            The flushed version, or None if it was vetoed

        Raises:
            InvalidActionForVersionError: If the action is unknown

        Example:
            await service.create_version(
                article, ACTION_UPDATE, reason="Imported from legacy CMS"
            )
        """
        # The owner needs its primary key
        await self.session.flush()

        def _create(sync_session: Session) -> Version | None:
            factory = versionable.version_factory.set_action(action)
            if reason is not None:
                versionable.set_versioning_reason(reason)
            try:
                return factory.create_new_version(sync_session)
            finally:
                versionable.set_versioning_reason(None)

        version = await self.session.run_sync(_create)
        if version is not None:
            await self.session.flush()
        return version

    async def purge_versions(self, versionable: VersionableMixin) -> int:
        """Delete all of a model's versions.

        Returns:
            Number of deleted versions
        """
        await self.session.flush()

        def _purge(sync_session: Session) -> int:
            return versionable.version_factory.purge_versions(sync_session)

        return await self.session.run_sync(_purge)
