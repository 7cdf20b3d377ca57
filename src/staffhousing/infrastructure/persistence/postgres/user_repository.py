"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from staffhousing.domain.entities import User

_SELECT_USERS = (
    "SELECT u.id, u.username, u.role_id, u.property_id, u.is_super_admin, u.status, "
    "COALESCE(array_agg(up.property_id) FILTER (WHERE up.property_id IS NOT NULL), "
    "'{}'::int[]) "
    "FROM app_user u LEFT JOIN user_property up ON up.user_id = u.id"
)


def _to_user(r: tuple) -> User:
    return User(
        id=r[0],
        username=r[1],
        role_id=r[2],
        property_id=r[3],
        is_super_admin=r[4],
        status=r[5],
        authorized_properties=frozenset(r[6]),
    )


class PostgresUserRepository:
    """User repository implementation; property scope lives in user_property."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: int) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"{_SELECT_USERS} WHERE u.id = %s GROUP BY u.id",
            (user_id,),
        )
        r = await cur.fetchone()
        return _to_user(r) if r else None

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username (case-insensitive)."""
        cur = await self._conn.execute(
            f"{_SELECT_USERS} WHERE lower(u.username) = lower(%s) GROUP BY u.id",
            (username,),
        )
        r = await cur.fetchone()
        return _to_user(r) if r else None

    async def create(
        self,
        username: str,
        role_id: int,
        property_id: int,
        authorized_properties: frozenset[int],
        is_super_admin: bool = False,
    ) -> User:
        """Create user and its property scope."""
        cur = await self._conn.execute(
            "INSERT INTO app_user (username, role_id, property_id, is_super_admin, status, created_at) "
            "VALUES (%s, %s, %s, %s, 'active', now()) RETURNING id",
            (username, role_id, property_id, is_super_admin),
        )
        row = await cur.fetchone()
        user = User(
            id=row[0],
            username=username,
            role_id=role_id,
            property_id=property_id,
            authorized_properties=authorized_properties,
            is_super_admin=is_super_admin,
        )
        await self._write_properties(user)
        return user

    async def update(self, user: User) -> None:
        """Update security fields and replace property scope."""
        await self._conn.execute(
            "UPDATE app_user SET role_id=%s, property_id=%s, is_super_admin=%s, status=%s "
            "WHERE id=%s",
            (user.role_id, user.property_id, user.is_super_admin, user.status, user.id),
        )
        await self._conn.execute(
            "DELETE FROM user_property WHERE user_id = %s",
            (user.id,),
        )
        await self._write_properties(user)

    async def count_by_role(self, role_id: int) -> int:
        """Count users assigned to role."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM app_user WHERE role_id = %s",
            (role_id,),
        )
        row = await cur.fetchone()
        return row[0]

    async def _write_properties(self, user: User) -> None:
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO user_property (user_id, property_id, is_default) VALUES (%s, %s, %s)",
                [
                    (user.id, pid, pid == user.property_id)
                    for pid in sorted(user.authorized_properties)
                ],
            )
