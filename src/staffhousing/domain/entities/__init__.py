"""Domain entities."""

from staffhousing.domain.entities.override_set import OverrideSet
from staffhousing.domain.entities.permission_override import (
    OverrideDraft,
    PermissionOverride,
    UnsavedOverride,
    dedupe_overrides,
    reconcile,
    state_of,
)
from staffhousing.domain.entities.role import Role
from staffhousing.domain.entities.user import User

__all__ = [
    "OverrideDraft",
    "OverrideSet",
    "PermissionOverride",
    "Role",
    "UnsavedOverride",
    "User",
    "dedupe_overrides",
    "reconcile",
    "state_of",
]
