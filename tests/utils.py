"""Helpers shared by tests."""

from sqlalchemy.orm import Session

from versionable import Version


def versions_of(session: Session, versionable) -> list[Version]:
    """Load a model's versions, newest first."""
    return list(session.scalars(versionable.versions_query()).all())
