"""Create role use case."""

from staffhousing.application.ports import PermissionChecker
from staffhousing.domain.catalog import unknown_permissions
from staffhousing.domain.entities import Role
from staffhousing.domain.exceptions import Conflict, PermissionDenied, ValidationError
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


def clean_role_input(name: str, permissions: list[str]) -> tuple[str, frozenset[str]]:
    """Trim the name and reject blank names or keys outside the catalog."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Role name is required")
    unknown = unknown_permissions(permissions)
    if unknown:
        raise ValidationError(f"Unknown permission keys: {', '.join(sorted(set(unknown)))}")
    return name, frozenset(permissions)


class CreateRoleUseCase:
    """Create a custom (non-system) role template."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor_id: int,
        acting_property_id: int,
        name: str,
        permissions: list[str],
    ) -> Role:
        """Create role. Actor must have ROLE.MANAGE."""
        if not await self._permission_checker.check(actor_id, acting_property_id, "ROLE.MANAGE"):
            raise PermissionDenied("User does not have ROLE.MANAGE permission")

        name, keys = clean_role_input(name, permissions)
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise Conflict("Role name must be unique")
            role = await uow.roles.create(name, keys)

        log.info("Role %s (%s) created by %s", role.id, role.name, actor_id)
        return role
