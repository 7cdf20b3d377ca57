"""Where an effective permission value comes from."""

from enum import StrEnum


class PermissionSource(StrEnum):
    """Origin of a resolved permission value."""

    SUPER_ADMIN = "super_admin"
    ROLE = "role"
    OVERRIDE = "override"
