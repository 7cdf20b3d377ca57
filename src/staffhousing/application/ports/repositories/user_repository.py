"""User repository port."""

from typing import Protocol

from staffhousing.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence (security fields and property scope)."""

    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def create(
        self,
        username: str,
        role_id: int,
        property_id: int,
        authorized_properties: frozenset[int],
        is_super_admin: bool = False,
    ) -> User: ...

    async def update(self, user: User) -> None: ...

    async def count_by_role(self, role_id: int) -> int: ...
