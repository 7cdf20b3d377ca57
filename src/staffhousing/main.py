"""Application entry point and composition root."""

import falcon.asgi

from staffhousing import __version__
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
from staffhousing.config import get_settings
from staffhousing.infrastructure.permission.permission_checker import (
    StaffHousingPermissionChecker,
)
from staffhousing.infrastructure.persistence.postgres.connection import create_pool
from staffhousing.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from staffhousing.interfaces.api.errors import register_error_handlers
from staffhousing.interfaces.api.middleware.auth import IdentityMiddleware
from staffhousing.interfaces.api.middleware.cors import CORSMiddleware
from staffhousing.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from staffhousing.interfaces.api.resources.health import HealthResource
from staffhousing.interfaces.api.resources.permissions import PermissionCatalogResource
from staffhousing.interfaces.api.resources.roles import RoleResource, RolesResource
from staffhousing.interfaces.api.resources.users import (
    EffectivePermissionsResource,
    UserOverrideResource,
    UserSecurityResource,
    UsersResource,
)
from staffhousing.logging_config import get_logger, setup_logging

log = get_logger(__name__)


def main() -> None:
    """CLI entry point - serve the API."""
    run_server()


def create_staffhousing_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.effective_log_level())

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    permission_checker = StaffHousingPermissionChecker(uow_factory)

    create_role = CreateRoleUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    update_role = UpdateRoleUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    delete_role = DeleteRoleUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    save_user_security = SaveUserSecurityUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    set_override_state = SetOverrideStateUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    get_effective = GetEffectivePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )

    health_resource = HealthResource(pool)
    catalog_resource = PermissionCatalogResource()
    roles_resource = RolesResource(uow_factory, create_role)
    role_resource = RoleResource(update_role, delete_role)
    users_resource = UsersResource(save_user_security)
    user_security_resource = UserSecurityResource(save_user_security)
    user_override_resource = UserOverrideResource(set_override_state)
    effective_resource = EffectivePermissionsResource(get_effective)

    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(settings.cors_origin_list()),
            PoolLifespanMiddleware(pool),
            IdentityMiddleware(),
        ],
    )
    register_error_handlers(app)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/permissions", catalog_resource)
    app.add_route("/v1/roles", roles_resource)
    app.add_route("/v1/roles/{role_id:int}", role_resource)
    app.add_route("/v1/users", users_resource)
    app.add_route("/v1/users/{user_id:int}/security", user_security_resource)
    app.add_route(
        "/v1/users/{user_id:int}/overrides/{property_id:int}/{permission_key}",
        user_override_resource,
    )
    app.add_route("/v1/users/{user_id:int}/effective-permissions", effective_resource)
    app.add_route(
        "/v1/users/{user_id:int}/effective-permissions/{permission_key}",
        effective_resource,
        suffix="key",
    )

    log.info(
        "Application created (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_staffhousing_app()
    log.info(
        "Starting Staff Housing authorization v%s on %s:%s",
        __version__,
        settings.host,
        settings.port,
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
