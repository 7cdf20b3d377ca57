"""Permission override repository port.

Implementations keep at most one record per (user_id, property_id,
permission_key); a later write for the same triple replaces the earlier one.
"""

from typing import Protocol

from staffhousing.domain.entities import PermissionOverride


class OverrideRepository(Protocol):
    """Port for permission override persistence."""

    async def list_for_user(self, user_id: int) -> list[PermissionOverride]: ...

    async def get(
        self, user_id: int, property_id: int, permission_key: str
    ) -> PermissionOverride | None: ...

    async def upsert(self, override: PermissionOverride) -> None: ...

    async def delete(self, user_id: int, property_id: int, permission_key: str) -> None: ...

    async def replace_for_user(
        self, user_id: int, overrides: list[PermissionOverride]
    ) -> None: ...
