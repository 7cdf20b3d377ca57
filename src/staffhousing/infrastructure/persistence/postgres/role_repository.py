"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection

from staffhousing.domain.entities import Role

_SELECT_ROLES = (
    "SELECT r.id, r.name, r.is_system, "
    "COALESCE(array_agg(rp.permission_key) FILTER (WHERE rp.permission_key IS NOT NULL), "
    "'{}'::text[]) "
    "FROM role r LEFT JOIN role_permission rp ON rp.role_id = r.id"
)


def _to_role(r: tuple) -> Role:
    return Role(id=r[0], name=r[1], is_system=r[2], permissions=frozenset(r[3]))


class PostgresRoleRepository:
    """Role repository implementation; permissions live in role_permission."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: int) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"{_SELECT_ROLES} WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"{_SELECT_ROLES} WHERE r.name = %s GROUP BY r.id",
            (name,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"{_SELECT_ROLES} GROUP BY r.id ORDER BY r.id")
        rows = await cur.fetchall()
        return [_to_role(r) for r in rows]

    async def create(self, name: str, permissions: frozenset[str]) -> Role:
        """Create a non-system role."""
        cur = await self._conn.execute(
            "INSERT INTO role (name, is_system) VALUES (%s, false) RETURNING id",
            (name,),
        )
        row = await cur.fetchone()
        role = Role(id=row[0], name=name, permissions=permissions, is_system=False)
        await self._write_permissions(role)
        return role

    async def update(self, role: Role) -> None:
        """Update role name and replace its permissions."""
        await self._conn.execute(
            "UPDATE role SET name = %s WHERE id = %s",
            (role.name, role.id),
        )
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role.id,),
        )
        await self._write_permissions(role)

    async def delete(self, role_id: int) -> None:
        """Delete role; system roles are never removed."""
        await self._conn.execute(
            "DELETE FROM role WHERE id = %s AND NOT is_system",
            (role_id,),
        )

    async def _write_permissions(self, role: Role) -> None:
        if not role.permissions:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO role_permission (role_id, permission_key) VALUES (%s, %s)",
                [(role.id, key) for key in sorted(role.permissions)],
            )
