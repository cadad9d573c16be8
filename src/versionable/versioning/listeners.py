"""Automatic version capture via SQLAlchemy session events.

``before_flush`` decides which action each versionable instance in the
flush performed and records it on the instance's factory.
``after_flush_postexec`` then creates the versions, once primary keys
and server defaults are known. Versions are added to the session and
written by the next flush, which ``Session.commit()`` performs itself.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from versionable.config import settings
from versionable.constants import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_RESTORE,
    ACTION_SOFT_DELETE,
    ACTION_UPDATE,
    SOFT_DELETE_COLUMN,
)
from versionable.versioning.mixins import VersionableMixin


log = structlog.get_logger()

# Session.info key holding the instances queued for versioning
PENDING_KEY = "versionable_pending"

_versioning_disabled: ContextVar[bool] = ContextVar(
    "versioning_disabled", default=False
)


@contextmanager
def versioning_disabled() -> Iterator[None]:
    """Suspend automatic versioning for flushes inside the block.

    Example:
        with versioning_disabled():
            article.view_count += 1
            session.commit()
    """
    token = _versioning_disabled.set(True)
    try:
        yield
    finally:
        _versioning_disabled.reset(token)


def versioning_enabled() -> bool:
    """Check whether flushes should currently produce versions."""
    return settings.enabled and not _versioning_disabled.get()


def _should_version(obj: Any) -> bool:
    return isinstance(obj, VersionableMixin) and getattr(obj, "__versionable__", False)


def _changed_columns(obj: Any) -> set[str]:
    """Get the column attributes with pending changes."""
    state = inspect(obj)
    return {
        attr.key
        for attr in state.mapper.column_attrs
        if state.attrs[attr.key].history.has_changes()
    }


def _soft_delete_action(obj: Any) -> str | None:
    """Classify a change of the soft-delete column.

    Returns None when the value went from one timestamp to another.
    """
    history = inspect(obj).attrs[SOFT_DELETE_COLUMN].history
    new_value = history.added[0] if history.added else None
    old_value = history.deleted[0] if history.deleted else None

    if new_value is not None and old_value is None:
        return ACTION_SOFT_DELETE
    if new_value is None and old_value is not None:
        return ACTION_RESTORE
    return None


def classify_dirty(obj: Any) -> str | None:
    """Get the action performed on a modified instance.

    Returns:
        soft-delete, restore or update, or None when only excluded
        columns changed
    """
    changed = _changed_columns(obj)

    if SOFT_DELETE_COLUMN in changed:
        action = _soft_delete_action(obj)
        if action is not None:
            return action

    if changed - set(obj.__versioning_exclude__):
        return ACTION_UPDATE

    return None


def _load_columns(obj: Any) -> None:
    """Load expired columns while the row still exists."""
    state = inspect(obj)
    for key in state.unloaded & set(state.mapper.column_attrs.keys()):
        getattr(obj, key)


def _queue(session: Session, obj: Any, action: str) -> None:
    """Set the pending action on an instance and queue it.

    An action that is already pending wins, so an explicitly set
    action is not overwritten by the classified one.
    """
    factory = obj.version_factory
    if not factory.has_action():
        factory.set_action(action)

    pending: list[Any] = session.info.setdefault(PENDING_KEY, [])
    if not any(queued is obj for queued in pending):
        pending.append(obj)


def _before_flush(session: Session, _flush_context: Any, _instances: Any) -> None:
    """Record the action performed on each versionable instance."""
    if not versioning_enabled():
        return

    for obj in session.new:
        if _should_version(obj):
            _queue(session, obj, ACTION_CREATE)

    for obj in session.dirty:
        if _should_version(obj) and session.is_modified(obj):
            action = classify_dirty(obj)
            if action is not None:
                _queue(session, obj, action)

    for obj in session.deleted:
        if _should_version(obj):
            _load_columns(obj)
            _queue(session, obj, ACTION_DELETE)


def _after_flush_postexec(session: Session, _flush_context: Any) -> None:
    """Create versions for the instances queued in before_flush."""
    pending: list[Any] = session.info.pop(PENDING_KEY, [])
    handled = 0

    try:
        for obj in pending:
            handled += 1
            try:
                factory = obj.version_factory
                if factory.has_action():
                    factory.create_new_version(session)
            finally:
                obj.version_factory.reset_action()
                obj.set_versioning_reason(None)
    finally:
        _discard_pending(pending[handled:])


def _discard_pending(pending: list[Any]) -> None:
    for obj in pending:
        obj.version_factory.reset_action()
        obj.set_versioning_reason(None)

    if pending:
        log.debug("versioning_pending_discarded", count=len(pending))


def _after_soft_rollback(session: Session, _previous_transaction: Any) -> None:
    """Drop queued actions of a flush that did not complete."""
    _discard_pending(session.info.pop(PENDING_KEY, []))


_LISTENERS = (
    ("before_flush", _before_flush),
    ("after_flush_postexec", _after_flush_postexec),
    ("after_soft_rollback", _after_soft_rollback),
)


def setup_versioning_listeners() -> None:
    """Set up SQLAlchemy event listeners for automatic versioning.

    Call this during application startup. Calling it again is a no-op.
    """
    installed = False
    for identifier, listener in _LISTENERS:
        if not event.contains(Session, identifier, listener):
            event.listen(Session, identifier, listener)
            installed = True

    if installed:
        log.info("versioning_listeners_installed")


def remove_versioning_listeners() -> None:
    """Remove the listeners installed by setup_versioning_listeners."""
    for identifier, listener in _LISTENERS:
        if event.contains(Session, identifier, listener):
            event.remove(Session, identifier, listener)
