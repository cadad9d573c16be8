"""SQLAlchemy declarative base and common mixins."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UUIDMixin:
    """Mixin that adds a UUID primary key."""

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        index=True,
    )


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class SoftDeleteMixin:
    """Mixin that adds a deleted_at column for soft deletion.

    Soft-deleting a versionable model records a "soft-delete" version,
    and restoring it records a "restore" version.

    Example:
        class Article(Base, UUIDMixin, SoftDeleteMixin, VersionableMixin):
            __tablename__ = "articles"
            title: Mapped[str] = mapped_column(String(255))

        article.soft_delete()
        await session.commit()
    """

    # Previous value is loaded on set so soft-delete/restore can be told
    # apart from a timestamp change on expired instances
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        active_history=True,
    )

    @property
    def is_trashed(self) -> bool:
        """Check if the record is soft-deleted."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Mark the record as deleted without removing the row."""
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        """Clear the soft-delete marker."""
        self.deleted_at = None
