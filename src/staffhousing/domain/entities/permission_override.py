"""Permission override entities - per-user, per-property exceptions to a role."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from staffhousing.domain.exceptions import ValidationError
from staffhousing.domain.value_objects import OverrideState


@dataclass(frozen=True)
class PermissionOverride:
    """Stored override: is_allowed=True forces a grant, False forces a deny."""

    user_id: int
    property_id: int
    permission_key: str
    is_allowed: bool

    @property
    def key(self) -> tuple[int, int, str]:
        """Uniqueness key - at most one override per triple."""
        return (self.user_id, self.property_id, self.permission_key)

    @property
    def state(self) -> OverrideState:
        return OverrideState.GRANT if self.is_allowed else OverrideState.DENY


@dataclass(frozen=True)
class UnsavedOverride:
    """Override drafted for a user that has no id yet (user creation in progress)."""

    correlation_id: UUID
    property_id: int
    permission_key: str
    is_allowed: bool

    @property
    def state(self) -> OverrideState:
        return OverrideState.GRANT if self.is_allowed else OverrideState.DENY

    def bind(self, user_id: int) -> PermissionOverride:
        """Attach the persisted user id."""
        return PermissionOverride(
            user_id=user_id,
            property_id=self.property_id,
            permission_key=self.permission_key,
            is_allowed=self.is_allowed,
        )


OverrideDraft = UnsavedOverride | PermissionOverride


def dedupe_overrides(overrides: Iterable[PermissionOverride]) -> list[PermissionOverride]:
    """Reduce to one record per (user, property, permission); the last write wins."""
    by_key: dict[tuple[int, int, str], PermissionOverride] = {}
    for override in overrides:
        by_key.pop(override.key, None)
        by_key[override.key] = override
    return list(by_key.values())


def reconcile(drafts: Iterable[OverrideDraft], user_id: int) -> list[PermissionOverride]:
    """Convert drafts into saved overrides for user_id once the user is persisted.

    Saved drafts must already belong to user_id.
    """
    saved: list[PermissionOverride] = []
    for draft in drafts:
        if isinstance(draft, UnsavedOverride):
            saved.append(draft.bind(user_id))
        elif draft.user_id == user_id:
            saved.append(draft)
        else:
            raise ValidationError(
                f"Override for user {draft.user_id} cannot be saved for user {user_id}"
            )
    return dedupe_overrides(saved)


def state_of(override: OverrideDraft | None) -> OverrideState:
    """Tri-state value shown for a slot; no override means inherit."""
    if override is None:
        return OverrideState.INHERIT
    return override.state
