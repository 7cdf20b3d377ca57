"""Role API resources."""

import falcon.asgi

from staffhousing.application.use_cases.role.create_role import CreateRoleUseCase
from staffhousing.application.use_cases.role.delete_role import DeleteRoleUseCase
from staffhousing.application.use_cases.role.update_role import UpdateRoleUseCase
from staffhousing.domain.catalog import in_catalog_order
from staffhousing.domain.entities import Role
from staffhousing.interfaces.api.errors import acting_property, require_user


def role_to_dict(role: Role) -> dict:
    return {
        "id": role.id,
        "name": role.name,
        "permissions": in_catalog_order(role.permissions),
        "is_system": role.is_system,
    }


async def _read_role_body(req: falcon.asgi.Request) -> tuple[str, list[str]]:
    try:
        body = await req.get_media()
        name = body["name"]
        permissions = body.get("permissions", [])
    except (KeyError, TypeError, AttributeError) as e:
        raise falcon.HTTPBadRequest(title=f"Missing required field: {e}") from e
    if not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions):
        raise falcon.HTTPBadRequest(title="permissions must be a list of strings")
    return name, permissions


class RolesResource:
    """GET/POST /v1/roles - list and create role templates."""

    def __init__(self, unit_of_work_factory: type, create_role: CreateRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        require_user(req)
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req)
        name, permissions = await _read_role_body(req)
        role = await self._create.execute(
            user.user_id, acting_property(req, user), name, permissions
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """PUT/DELETE /v1/roles/{role_id} - edit or delete a role template."""

    def __init__(self, update_role: UpdateRoleUseCase, delete_role: DeleteRoleUseCase) -> None:
        self._update = update_role
        self._delete = delete_role

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: int
    ) -> None:
        user = require_user(req)
        name, permissions = await _read_role_body(req)
        role = await self._update.execute(
            user.user_id, acting_property(req, user), role_id, name, permissions
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: int
    ) -> None:
        user = require_user(req)
        await self._delete.execute(user.user_id, acting_property(req, user), role_id)
        resp.status = falcon.HTTP_204
