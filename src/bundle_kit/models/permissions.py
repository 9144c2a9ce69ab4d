"""Permission mode selection."""

from enum import Enum

from bundle_kit.errors import UnsupportedPermissionModeError


class PermissionMode(Enum):
    """How per-command allowed tools influence the global permission block."""

    NONE = "none"
    BROAD = "broad"
    FROM_COMMAND = "from-command"


DEFAULT_PERMISSION_MODE = PermissionMode.NONE


def parse_permission_mode(value: str) -> PermissionMode:
    """Validate and return a permission mode.

    Args:
        value: Selector string from the CLI or caller

    Returns:
        Matching PermissionMode

    Raises:
        UnsupportedPermissionModeError: If value is not none, broad or from-command
    """
    for mode in PermissionMode:
        if mode.value == value:
            return mode
    raise UnsupportedPermissionModeError(value)
