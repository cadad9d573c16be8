"""Package-wide constants.

This module defines the version action tags and column limits used
throughout the package to avoid magic strings and numbers.
"""

# Version actions
ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"
ACTION_SOFT_DELETE = "soft-delete"
ACTION_RESTORE = "restore"

VERSION_ACTIONS = (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DELETE,
    ACTION_SOFT_DELETE,
    ACTION_RESTORE,
)

# URL recorded for versions created outside of an HTTP request
CONSOLE_URL = "console"

# String field lengths
MAX_ACTION_LENGTH = 50
MAX_VERSIONABLE_TYPE_LENGTH = 100
MAX_VERSIONABLE_ID_LENGTH = 255
MAX_USER_ID_LENGTH = 255
MAX_IPV6_LENGTH = 45
MAX_USER_AGENT_LENGTH = 512

# Defaults
DEFAULT_TABLE_NAME = "versions"
DEFAULT_EXCLUDED_ATTRIBUTES = frozenset({"updated_at"})
SOFT_DELETE_COLUMN = "deleted_at"
