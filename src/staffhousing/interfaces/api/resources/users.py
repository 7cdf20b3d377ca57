"""User security API resources."""

from uuid import UUID, uuid4

import falcon.asgi

from staffhousing.application.dto.user_security import UserSecurityInput
from staffhousing.application.use_cases.security.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from staffhousing.application.use_cases.security.save_user_security import (
    SaveUserSecurityUseCase,
)
from staffhousing.application.use_cases.security.set_override_state import (
    SetOverrideStateUseCase,
)
from staffhousing.domain.entities import OverrideDraft, PermissionOverride, UnsavedOverride, User
from staffhousing.interfaces.api.errors import acting_property, require_user


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "role_id": user.role_id,
        "property_id": user.property_id,
        "authorized_properties": sorted(user.authorized_properties),
        "is_super_admin": user.is_super_admin,
        "status": user.status,
    }


def _parse_override(item: dict, user_id: int | None) -> OverrideDraft:
    property_id = int(item["property_id"])
    permission_key = str(item["permission_key"])
    is_allowed = item["is_allowed"]
    if not isinstance(is_allowed, bool):
        raise ValueError("is_allowed must be a boolean")
    if user_id is None:
        correlation_id = item.get("correlation_id")
        return UnsavedOverride(
            correlation_id=UUID(correlation_id) if correlation_id else uuid4(),
            property_id=property_id,
            permission_key=permission_key,
            is_allowed=is_allowed,
        )
    return PermissionOverride(
        user_id=user_id,
        property_id=property_id,
        permission_key=permission_key,
        is_allowed=is_allowed,
    )


async def _read_security_body(
    req: falcon.asgi.Request, user_id: int | None
) -> UserSecurityInput:
    try:
        body = await req.get_media()
        is_super_admin = body.get("is_super_admin", False)
        if not isinstance(is_super_admin, bool):
            raise ValueError("is_super_admin must be a boolean")
        return UserSecurityInput(
            role_id=int(body["role_id"]),
            property_id=int(body["property_id"]),
            authorized_properties=frozenset(int(p) for p in body["authorized_properties"]),
            overrides=[_parse_override(o, user_id) for o in body.get("overrides", [])],
            is_super_admin=is_super_admin,
            username=body.get("username"),
        )
    except KeyError as e:
        raise falcon.HTTPBadRequest(title=f"Missing required field: {e}") from e
    except (ValueError, TypeError, AttributeError) as e:
        raise falcon.HTTPBadRequest(title=f"Invalid request body: {e}") from e


class UsersResource:
    """POST /v1/users - create a user together with its access policy."""

    def __init__(self, save_user_security: SaveUserSecurityUseCase) -> None:
        self._save = save_user_security

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_user(req)
        input_data = await _read_security_body(req, None)
        user = await self._save.execute(
            actor.user_id, acting_property(req, actor), input_data
        )
        resp.media = user_to_dict(user)
        resp.status = falcon.HTTP_201


class UserSecurityResource:
    """PUT /v1/users/{user_id}/security - replace role, scope and overrides."""

    def __init__(self, save_user_security: SaveUserSecurityUseCase) -> None:
        self._save = save_user_security

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: int
    ) -> None:
        actor = require_user(req)
        input_data = await _read_security_body(req, user_id)
        user = await self._save.execute(
            actor.user_id, acting_property(req, actor), input_data, user_id=user_id
        )
        resp.media = user_to_dict(user)
        resp.status = falcon.HTTP_200


class UserOverrideResource:
    """PUT /v1/users/{user_id}/overrides/{property_id}/{permission_key} - set tri-state."""

    def __init__(self, set_override_state: SetOverrideStateUseCase) -> None:
        self._set_state = set_override_state

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: int,
        property_id: int,
        permission_key: str,
    ) -> None:
        actor = require_user(req)
        try:
            body = await req.get_media()
            state = body["state"]
        except (KeyError, TypeError) as e:
            raise falcon.HTTPBadRequest(title=f"Missing required field: {e}") from e

        result = await self._set_state.execute(
            actor.user_id,
            acting_property(req, actor),
            user_id,
            property_id,
            permission_key,
            state,
        )
        resp.media = {
            "user_id": user_id,
            "property_id": property_id,
            "permission_key": permission_key,
            "state": result.value,
        }
        resp.status = falcon.HTTP_200


class EffectivePermissionsResource:
    """GET /v1/users/{user_id}/effective-permissions[/{permission_key}]."""

    def __init__(self, get_effective: GetEffectivePermissionsUseCase) -> None:
        self._get_effective = get_effective

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: int
    ) -> None:
        """Resolved permission set; ?property_id= defaults to the user's default property."""
        actor = require_user(req)
        result = await self._get_effective.execute(
            actor.user_id,
            acting_property(req, actor),
            user_id,
            req.get_param_as_int("property_id"),
        )
        resp.media = {
            "user_id": result.user_id,
            "property_id": result.property_id,
            "permissions": result.permissions,
        }
        resp.status = falcon.HTTP_200

    async def on_get_key(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: int,
        permission_key: str,
    ) -> None:
        """How one permission resolves and what decided it."""
        actor = require_user(req)
        property_id, explanation = await self._get_effective.explain(
            actor.user_id,
            acting_property(req, actor),
            user_id,
            permission_key,
            req.get_param_as_int("property_id"),
        )
        resp.media = {
            "user_id": user_id,
            "property_id": property_id,
            "permission_key": explanation.permission_key,
            "allowed": explanation.allowed,
            "source": explanation.source.value,
            "override_state": explanation.override_state.value,
            "role_allows": explanation.role_allows,
        }
        resp.status = falcon.HTTP_200
