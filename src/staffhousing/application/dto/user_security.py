"""User security DTOs."""

from dataclasses import dataclass, field

from staffhousing.domain.entities import OverrideDraft


@dataclass
class UserSecurityInput:
    """Role, property scope and overrides submitted by the user editor."""

    role_id: int
    property_id: int
    authorized_properties: frozenset[int]
    overrides: list[OverrideDraft] = field(default_factory=list)
    is_super_admin: bool = False
    username: str | None = None


@dataclass
class EffectivePermissionsOutput:
    """Resolved permissions for one (user, property) pair."""

    user_id: int
    property_id: int
    permissions: list[str]
