"""Models used by the test suite."""

from typing import Any
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from versionable import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    VersionableMixin,
)


class Article(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin, VersionableMixin):
    """Versioned model with soft deletes; drafts are never versioned."""

    __tablename__ = "articles"
    __versioning_exclude__ = frozenset({"updated_at", "view_count"})

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="published")
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def should_create_new_version(self, action: str) -> bool:
        return self.status != "draft"


class Comment(Base, VersionableMixin):
    """Versioned model with an integer key and additional data."""

    __tablename__ = "comments"
    __versionable_type__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    article_id: Mapped[UUID] = mapped_column(ForeignKey("articles.id"), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    def additional_data_for_versioning(self) -> Any:
        return {"length": len(self.body)}


class Tag(Base, UUIDMixin):
    """Model without versioning."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
