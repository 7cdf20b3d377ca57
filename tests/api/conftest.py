"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from staffhousing.application.use_cases.role.create_role import CreateRoleUseCase
from staffhousing.application.use_cases.role.delete_role import DeleteRoleUseCase
from staffhousing.application.use_cases.role.update_role import UpdateRoleUseCase
from staffhousing.application.use_cases.security.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from staffhousing.application.use_cases.security.save_user_security import (
    SaveUserSecurityUseCase,
)
from staffhousing.application.use_cases.security.set_override_state import (
    SetOverrideStateUseCase,
)
from staffhousing.domain.entities import User
from staffhousing.interfaces.api.errors import register_error_handlers
from staffhousing.interfaces.api.middleware.auth import (
    PROPERTY_HEADER,
    USER_HEADER,
    IdentityMiddleware,
)
from staffhousing.interfaces.api.middleware.cors import CORSMiddleware

ALLOWED_ORIGIN = "https://housing.example.com"
ADMIN_HEADERS = {USER_HEADER: "1", PROPERTY_HEADER: "1"}


@pytest.fixture
def app(fake_uow, uow_factory, mock_permission_checker):
    """Falcon ASGI app with API resources for testing."""
    fake_uow.users.add_user(
        User(
            id=5,
            username="clerk",
            role_id=6,
            property_id=1,
            authorized_properties=frozenset({1, 2}),
        )
    )

    from staffhousing.interfaces.api.resources.health import HealthResource
    from staffhousing.interfaces.api.resources.permissions import PermissionCatalogResource
    from staffhousing.interfaces.api.resources.roles import RoleResource, RolesResource
    from staffhousing.interfaces.api.resources.users import (
        EffectivePermissionsResource,
        UserOverrideResource,
        UserSecurityResource,
        UsersResource,
    )

    kwargs = {"unit_of_work_factory": uow_factory, "permission_checker": mock_permission_checker}
    save_user_security = SaveUserSecurityUseCase(**kwargs)
    effective = EffectivePermissionsResource(GetEffectivePermissionsUseCase(**kwargs))

    app = falcon.asgi.App(middleware=[CORSMiddleware([ALLOWED_ORIGIN]), IdentityMiddleware()])
    register_error_handlers(app)
    app.add_route("/v1/health", HealthResource())
    app.add_route("/v1/permissions", PermissionCatalogResource())
    app.add_route("/v1/roles", RolesResource(uow_factory, CreateRoleUseCase(**kwargs)))
    app.add_route(
        "/v1/roles/{role_id:int}",
        RoleResource(UpdateRoleUseCase(**kwargs), DeleteRoleUseCase(**kwargs)),
    )
    app.add_route("/v1/users", UsersResource(save_user_security))
    app.add_route("/v1/users/{user_id:int}/security", UserSecurityResource(save_user_security))
    app.add_route(
        "/v1/users/{user_id:int}/overrides/{property_id:int}/{permission_key}",
        UserOverrideResource(SetOverrideStateUseCase(**kwargs)),
    )
    app.add_route("/v1/users/{user_id:int}/effective-permissions", effective)
    app.add_route(
        "/v1/users/{user_id:int}/effective-permissions/{permission_key}",
        effective,
        suffix="key",
    )
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client acting as the seeded super admin in property 1."""
    return TestClient(app, headers=ADMIN_HEADERS)
