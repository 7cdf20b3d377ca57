"""Tri-state override control for one permission in one property."""

from enum import StrEnum


class OverrideState(StrEnum):
    """inherit - no override, the role decides; grant/deny - forced on/off."""

    INHERIT = "inherit"
    GRANT = "grant"
    DENY = "deny"
