"""Delete role use case."""

from staffhousing.application.ports import PermissionChecker
from staffhousing.domain.exceptions import Conflict, NotFound, PermissionDenied
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


class DeleteRoleUseCase:
    """Delete a custom role that no user is assigned to."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: int, acting_property_id: int, role_id: int) -> None:
        if not await self._permission_checker.check(actor_id, acting_property_id, "ROLE.MANAGE"):
            raise PermissionDenied("User does not have ROLE.MANAGE permission")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.is_system:
                raise PermissionDenied("System roles cannot be deleted")
            assigned = await uow.users.count_by_role(role_id)
            if assigned:
                raise Conflict(f"Role is assigned to {assigned} user(s)")
            await uow.roles.delete(role_id)

        log.info("Role %s deleted by %s", role_id, actor_id)
