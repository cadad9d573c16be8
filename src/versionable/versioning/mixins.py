"""Versionable mixin: the contract a model fulfils to get versions.

Models that inherit from ``VersionableMixin`` get a version row written
whenever they are created, updated, deleted, soft-deleted or restored,
once ``setup_versioning_listeners()`` has been called.

Example:
    class Article(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin, VersionableMixin):
        __tablename__ = "articles"
        __versioning_exclude__ = frozenset({"updated_at", "view_count"})

        title: Mapped[str] = mapped_column(String(255))

        def should_create_new_version(self, action: str) -> bool:
            return self.status != "draft"
"""

from typing import Any, ClassVar

from sqlalchemy import Select, inspect, select

from versionable.constants import DEFAULT_EXCLUDED_ATTRIBUTES
from versionable.core.errors import UnknownVersionableTypeError
from versionable.versioning.factory import VersionFactory
from versionable.versioning.models import Version
from versionable.versioning.serializers import serialize_value


class VersionableMixin:
    """Mixin enabling automatic versioning for a mapped model."""

    # Marker attribute checked by the lifecycle listeners
    __versionable__: ClassVar[bool] = True

    # Type tag stored on versions; defaults to the table name
    __versionable_type__: ClassVar[str | None] = None

    # Column attributes left out of snapshots and change detection
    __versioning_exclude__: ClassVar[frozenset[str]] = DEFAULT_EXCLUDED_ATTRIBUTES

    @classmethod
    def get_versionable_type(cls) -> str:
        """Get the type tag stored on this model's versions."""
        return cls.__versionable_type__ or cls.__tablename__  # type: ignore[attr-defined]

    @property
    def version_factory(self) -> VersionFactory:
        """The factory holding this instance's pending version action."""
        factory = self.__dict__.get("_version_factory")
        if factory is None:
            factory = VersionFactory(self)
            self.__dict__["_version_factory"] = factory
        return factory

    def versionable_key(self) -> tuple[str, str]:
        """Get the (type, id) pair identifying this instance's versions."""
        state = inspect(self)
        identity = state.identity or state.mapper.primary_key_from_instance(self)
        return self.get_versionable_type(), ":".join(str(part) for part in identity)

    def versions_query(self) -> Select[tuple[Version]]:
        """Build the query for this instance's versions, newest first."""
        versionable_type, versionable_id = self.versionable_key()
        return (
            select(Version)
            .where(
                Version.versionable_type == versionable_type,
                Version.versionable_id == versionable_id,
            )
            .order_by(Version.created_at.desc())
        )

    def should_create_new_version(self, action: str) -> bool:
        """Decide whether a version is warranted for the action.

        Override to skip versions for particular states.
        """
        return True

    def get_versioning_reason(self) -> str | None:
        """Get the reason recorded on the next version."""
        return self.__dict__.get("_versioning_reason")

    def set_versioning_reason(self, reason: str | None) -> None:
        """Set the reason recorded on the next version.

        The reason is cleared once the pending version is handled.
        """
        self.__dict__["_versioning_reason"] = reason

    def attributes_for_versioning(self) -> dict[str, Any]:
        """Get the column values to snapshot.

        Deleted instances cannot load expired attributes, so only the
        values still held in memory are used for them.
        """
        state = inspect(self)
        deleted = state.deleted or state.was_deleted
        excluded = self.__versioning_exclude__

        attributes: dict[str, Any] = {}
        for attr in state.mapper.column_attrs:
            if attr.key in excluded:
                continue
            if deleted and attr.key in state.unloaded:
                continue
            attributes[attr.key] = getattr(self, attr.key)
        return attributes

    def serialized_attributes_for_versioning(self) -> dict[str, Any]:
        """Get the snapshot as JSON-compatible data."""
        return serialize_value(self.attributes_for_versioning())

    def additional_data_for_versioning(self) -> Any:
        """Get extra data stored next to the snapshot. None by default."""
        return None

    def serialized_additional_data_for_versioning(self) -> Any:
        """Get the additional data as JSON-compatible data."""
        return serialize_value(self.additional_data_for_versioning())


def _iter_versionable_classes(cls: type = VersionableMixin) -> list[type]:
    classes: list[type] = []
    for subclass in cls.__subclasses__():
        if "__table__" in subclass.__dict__ or hasattr(subclass, "__mapper__"):
            classes.append(subclass)
        classes.extend(_iter_versionable_classes(subclass))
    return classes


def resolve_versionable_class(versionable_type: str) -> type:
    """Find the mapped versionable class for a version type tag.

    Args:
        versionable_type: Type tag stored on a version

    Returns:
        The mapped model class

    Raises:
        UnknownVersionableTypeError: If no mapped class uses the tag
    """
    for cls in _iter_versionable_classes():
        if cls.get_versionable_type() == versionable_type:  # type: ignore[attr-defined]
            return cls
    raise UnknownVersionableTypeError(versionable_type=versionable_type)
