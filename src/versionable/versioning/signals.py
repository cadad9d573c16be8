"""Versioning signals.

Receivers are connected with blinker and called with the versionable
instance as sender and the event object as the ``event`` keyword::

    from versionable.versioning.signals import creating_version

    @creating_version.connect
    def skip_drafts(sender, event):
        if sender.status == "draft":
            return False

A ``creating_version`` receiver returning ``False`` vetoes the version.
"""

from typing import TYPE_CHECKING, Any

from blinker import Namespace


if TYPE_CHECKING:
    from versionable.versioning.models import Version


versioning = Namespace()

creating_version = versioning.signal("creating_version")
"""This signal is sent before a version is created. Cancelable."""

created_version = versioning.signal("created_version")
"""This signal is sent after a version was added to the session."""


class CreatingVersion:
    """Event sent while a version is about to be created."""

    def __init__(self, versionable: Any, action: str) -> None:
        self.versionable = versionable
        self.action = action


class CreatedVersion:
    """Event sent once a version was created."""

    def __init__(self, versionable: Any, action: str, version: "Version") -> None:
        self.versionable = versionable
        self.action = action
        self.version = version


def dispatch_creating_version(event: CreatingVersion) -> bool:
    """Send ``creating_version`` and report whether the version may proceed.

    Returns:
        False if any receiver returned False, True otherwise
    """
    results = creating_version.send(event.versionable, event=event)
    return all(value is not False for _receiver, value in results)


def dispatch_created_version(event: CreatedVersion) -> None:
    """Send ``created_version``."""
    created_version.send(event.versionable, event=event)
