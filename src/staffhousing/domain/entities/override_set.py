"""Override editing buffer - the tri-state control behind the user editor."""

from collections.abc import Iterable, Iterator
from uuid import uuid4

from staffhousing.domain.entities.permission_override import (
    OverrideDraft,
    PermissionOverride,
    UnsavedOverride,
    state_of,
)
from staffhousing.domain.value_objects import OverrideState


class OverrideSet:
    """One user's override drafts, at most one per (property, permission).

    Without a user_id (user not created yet) new drafts are UnsavedOverride
    records carrying a correlation id; reconcile() binds them later.
    """

    def __init__(
        self,
        user_id: int | None = None,
        drafts: Iterable[OverrideDraft] = (),
    ) -> None:
        self._user_id = user_id
        self._drafts: dict[tuple[int, str], OverrideDraft] = {}
        for draft in drafts:
            self._put(draft)

    @property
    def user_id(self) -> int | None:
        return self._user_id

    def state(self, property_id: int, permission_key: str) -> OverrideState:
        return state_of(self._drafts.get((property_id, permission_key)))

    def apply(
        self,
        property_id: int,
        permission_key: str,
        state: OverrideState | str,
    ) -> None:
        """inherit deletes the slot; grant/deny create or replace it."""
        state = OverrideState(state)
        if state is OverrideState.INHERIT:
            self._drafts.pop((property_id, permission_key), None)
            return

        is_allowed = state is OverrideState.GRANT
        if self._user_id is None:
            draft: OverrideDraft = UnsavedOverride(
                correlation_id=uuid4(),
                property_id=property_id,
                permission_key=permission_key,
                is_allowed=is_allowed,
            )
        else:
            draft = PermissionOverride(
                user_id=self._user_id,
                property_id=property_id,
                permission_key=permission_key,
                is_allowed=is_allowed,
            )
        self._put(draft)

    def drafts(self) -> list[OverrideDraft]:
        return list(self._drafts.values())

    def _put(self, draft: OverrideDraft) -> None:
        slot = (draft.property_id, draft.permission_key)
        self._drafts.pop(slot, None)
        self._drafts[slot] = draft

    def __iter__(self) -> Iterator[OverrideDraft]:
        return iter(self.drafts())

    def __len__(self) -> int:
        return len(self._drafts)
