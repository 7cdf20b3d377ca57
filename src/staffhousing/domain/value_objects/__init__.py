"""Domain value objects."""

from staffhousing.domain.value_objects.override_state import OverrideState
from staffhousing.domain.value_objects.permission_source import PermissionSource

__all__ = [
    "OverrideState",
    "PermissionSource",
]
