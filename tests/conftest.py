"""Pytest fixtures for staffhousing tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace

import pytest

from staffhousing.domain.entities import PermissionOverride, Role, User, dedupe_overrides
from staffhousing.domain.system_roles import BOOTSTRAP_ADMIN, SYSTEM_ROLES


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[int, Role] = {}

    async def get_by_id(self, role_id: int) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._by_id.values():
            if role.name == name:
                return role
        return None

    async def list_all(self) -> list[Role]:
        return sorted(self._by_id.values(), key=lambda r: r.id)

    async def create(self, name: str, permissions: frozenset[str]) -> Role:
        role = Role(id=max(self._by_id, default=0) + 1, name=name, permissions=permissions)
        self._by_id[role.id] = role
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = role

    async def delete(self, role_id: int) -> None:
        role = self._by_id.get(role_id)
        if role and not role.is_system:
            del self._by_id[role_id]

    def add_role(self, role: Role) -> None:
        """Helper to add role for tests."""
        self._by_id[role.id] = role


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}

    async def get_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_username(self, username: str) -> User | None:
        for user in self._by_id.values():
            if user.username.lower() == username.lower():
                return user
        return None

    async def create(
        self,
        username: str,
        role_id: int,
        property_id: int,
        authorized_properties: frozenset[int],
        is_super_admin: bool = False,
    ) -> User:
        user = User(
            id=max(self._by_id, default=0) + 1,
            username=username,
            role_id=role_id,
            property_id=property_id,
            authorized_properties=authorized_properties,
            is_super_admin=is_super_admin,
        )
        self._by_id[user.id] = user
        return user

    async def update(self, user: User) -> None:
        self._by_id[user.id] = replace(user)

    async def count_by_role(self, role_id: int) -> int:
        return sum(1 for u in self._by_id.values() if u.role_id == role_id)

    def add_user(self, user: User) -> None:
        """Helper to add user for tests."""
        self._by_id[user.id] = user


class FakeOverrideRepository:
    """In-memory override repository keyed by (user_id, property_id, permission_key)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[int, int, str], PermissionOverride] = {}

    async def list_for_user(self, user_id: int) -> list[PermissionOverride]:
        return sorted(
            (o for o in self._by_key.values() if o.user_id == user_id),
            key=lambda o: (o.property_id, o.permission_key),
        )

    async def get(
        self, user_id: int, property_id: int, permission_key: str
    ) -> PermissionOverride | None:
        return self._by_key.get((user_id, property_id, permission_key))

    async def upsert(self, override: PermissionOverride) -> None:
        self._by_key[override.key] = override

    async def delete(self, user_id: int, property_id: int, permission_key: str) -> None:
        self._by_key.pop((user_id, property_id, permission_key), None)

    async def replace_for_user(
        self, user_id: int, overrides: list[PermissionOverride]
    ) -> None:
        self._by_key = {k: o for k, o in self._by_key.items() if o.user_id != user_id}
        for override in dedupe_overrides(overrides):
            if override.user_id == user_id:
                self._by_key[override.key] = override

    def add_override(self, override: PermissionOverride) -> None:
        """Helper to add override for tests."""
        self._by_key[override.key] = override


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository()
        self.overrides = FakeOverrideRepository()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


def seeded_uow() -> FakeUnitOfWork:
    """UnitOfWork holding the seeded system roles and super admin (id 1)."""
    uow = FakeUnitOfWork()
    for role in SYSTEM_ROLES:
        uow.roles.add_role(role)
    uow.users.add_user(replace(BOOTSTRAP_ADMIN))
    return uow


def factory_for(uow: FakeUnitOfWork):
    """Factory that yields the same uow on every call, committing like the real one."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Seeded in-memory UnitOfWork for each test."""
    return seeded_uow()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return factory_for(fake_uow)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock
