"""Version database model.

Stores one snapshot of a versionable record per qualifying lifecycle
event, together with who made the change and from which request.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text, event, inspect
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from versionable.config import settings
from versionable.constants import (
    MAX_ACTION_LENGTH,
    MAX_IPV6_LENGTH,
    MAX_USER_ID_LENGTH,
    MAX_VERSIONABLE_ID_LENGTH,
    MAX_VERSIONABLE_TYPE_LENGTH,
)
from versionable.core.database.base import Base, UUIDMixin
from versionable.core.errors import VersionImmutableError
from versionable.versioning.serializers import deserialize_value


JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Version(Base, UUIDMixin):
    """Snapshot of a versionable record.

    Attributes:
        versionable_type: Owner type tag (the owner's table name by default)
        versionable_id: Owner primary key, stringified
        user_id: The user who performed the action (nullable for console actions)
        action: create, update, delete, soft-delete or restore
        reason: Optional free-text reason for the change
        url: Full request URL, or "console" outside of a request
        ip_address: Client IP address
        user_agent: Client user agent string
        model_data: Serialized model attributes
        additional_data: Serialized additional data supplied by the model
        created_at: When the version was created
    """

    __tablename__ = settings.table_name

    # Owner
    versionable_type: Mapped[str] = mapped_column(
        String(MAX_VERSIONABLE_TYPE_LENGTH),
        nullable=False,
        index=True,
    )
    versionable_id: Mapped[str] = mapped_column(
        String(MAX_VERSIONABLE_ID_LENGTH),
        nullable=False,
        index=True,
    )

    # What happened
    user_id: Mapped[str | None] = mapped_column(
        String(MAX_USER_ID_LENGTH),
        nullable=True,
        index=True,
    )
    action: Mapped[str] = mapped_column(
        String(MAX_ACTION_LENGTH),
        nullable=False,
        index=True,
    )
    reason: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Request context
    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    ip_address: Mapped[str | None] = mapped_column(
        String(MAX_IPV6_LENGTH),
        nullable=True,
    )
    user_agent: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Data
    model_data: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
    )
    additional_data: Mapped[Any | None] = mapped_column(
        JSONType,
        nullable=True,
    )

    # Timestamp; set client-side so versions written in the same second
    # still sort in creation order
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        index=True,
    )

    def get_model(self, model_class: type | None = None) -> Any:
        """Rebuild a transient instance of the owner from this snapshot.

        The instance is not added to any session. Attributes missing
        from the snapshot keep their unset state.

        Args:
            model_class: Owner class; resolved from versionable_type if omitted

        Returns:
            A new, detached instance of the owner class

        Raises:
            UnknownVersionableTypeError: If the owner class cannot be resolved
        """
        from versionable.versioning.mixins import (  # noqa: PLC0415
            resolve_versionable_class,
        )

        cls = model_class or resolve_versionable_class(self.versionable_type)
        mapper = inspect(cls)

        values: dict[str, Any] = {}
        for attr in mapper.column_attrs:
            if attr.key not in self.model_data:
                continue
            column = attr.columns[0]
            try:
                python_type = column.type.python_type
            except NotImplementedError:
                python_type = None
            values[attr.key] = deserialize_value(self.model_data[attr.key], python_type)

        # Bypass __init__, which may require arguments
        instance = mapper.class_manager.new_instance()
        for key, value in values.items():
            setattr(instance, key, value)
        return instance

    def __repr__(self) -> str:
        return (
            f"<Version(id={self.id}, action={self.action}, "
            f"versionable_type={self.versionable_type}, "
            f"versionable_id={self.versionable_id})>"
        )


@event.listens_for(Version, "before_update")
def _prevent_version_update(_mapper: Any, _connection: Any, target: Version) -> None:
    """Reject UPDATE statements for persisted versions."""
    raise VersionImmutableError(details={"version_id": str(target.id)})
