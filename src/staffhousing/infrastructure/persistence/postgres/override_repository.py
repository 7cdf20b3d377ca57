"""PostgreSQL permission override repository implementation."""

from psycopg import AsyncConnection

from staffhousing.domain.entities import PermissionOverride, dedupe_overrides

_COLUMNS = "user_id, property_id, permission_key, is_allowed"


def _to_override(r: tuple) -> PermissionOverride:
    return PermissionOverride(
        user_id=r[0],
        property_id=r[1],
        permission_key=r[2],
        is_allowed=r[3],
    )


class PostgresOverrideRepository:
    """Override repository; (user_id, property_id, permission_key) is the primary key."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_for_user(self, user_id: int) -> list[PermissionOverride]:
        """List every override of a user, all properties."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permission_override WHERE user_id = %s "
            "ORDER BY property_id, permission_key",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_override(r) for r in rows]

    async def get(
        self, user_id: int, property_id: int, permission_key: str
    ) -> PermissionOverride | None:
        """Get one override."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permission_override "
            "WHERE user_id = %s AND property_id = %s AND permission_key = %s",
            (user_id, property_id, permission_key),
        )
        r = await cur.fetchone()
        return _to_override(r) if r else None

    async def upsert(self, override: PermissionOverride) -> None:
        """Create or replace the override for its triple."""
        await self._conn.execute(
            f"INSERT INTO user_permission_override ({_COLUMNS}) VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (user_id, property_id, permission_key) "
            "DO UPDATE SET is_allowed = EXCLUDED.is_allowed",
            (
                override.user_id,
                override.property_id,
                override.permission_key,
                override.is_allowed,
            ),
        )

    async def delete(self, user_id: int, property_id: int, permission_key: str) -> None:
        """Delete override (back to inherit)."""
        await self._conn.execute(
            "DELETE FROM user_permission_override "
            "WHERE user_id = %s AND property_id = %s AND permission_key = %s",
            (user_id, property_id, permission_key),
        )

    async def replace_for_user(
        self, user_id: int, overrides: list[PermissionOverride]
    ) -> None:
        """Replace all overrides of a user; duplicates collapse to the last write."""
        await self._conn.execute(
            "DELETE FROM user_permission_override WHERE user_id = %s",
            (user_id,),
        )
        rows = [
            (o.user_id, o.property_id, o.permission_key, o.is_allowed)
            for o in dedupe_overrides(overrides)
            if o.user_id == user_id
        ]
        if not rows:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                f"INSERT INTO user_permission_override ({_COLUMNS}) VALUES (%s, %s, %s, %s)",
                rows,
            )
