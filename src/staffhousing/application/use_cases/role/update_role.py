"""Update role use case."""

from dataclasses import replace

from staffhousing.application.ports import PermissionChecker
from staffhousing.application.use_cases.role.create_role import clean_role_input
from staffhousing.domain.entities import Role
from staffhousing.domain.exceptions import Conflict, NotFound, PermissionDenied
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


class UpdateRoleUseCase:
    """Edit a role's name and permissions; system roles keep their name."""

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
        role_id: int,
        name: str,
        permissions: list[str],
    ) -> Role:
        if not await self._permission_checker.check(actor_id, acting_property_id, "ROLE.MANAGE"):
            raise PermissionDenied("User does not have ROLE.MANAGE permission")

        name, keys = clean_role_input(name, permissions)
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system and name != role.name:
                raise PermissionDenied("System roles cannot be renamed")

            same_name = await uow.roles.get_by_name(name)
            if same_name and same_name.id != role.id:
                raise Conflict("Role name must be unique")

            updated = replace(role, name=name, permissions=keys)
            await uow.roles.update(updated)

        log.info("Role %s updated by %s", role_id, actor_id)
        return updated
