"""Permission checker implementation - resolves the actor's effective permissions."""

from staffhousing.domain.services import compute_effective


class StaffHousingPermissionChecker:
    """Checks a permission against the user's role and overrides for one property."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def check(self, user_id: int, property_id: int, permission_key: str) -> bool:
        """Check if user holds permission_key in property_id. Unknown or disabled users hold nothing."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user or not user.is_active:
                return False
            if not user.is_authorized_for(property_id):
                return False

            role = await uow.roles.get_by_id(user.role_id)
            overrides = await uow.overrides.list_for_user(user.id)

        effective = compute_effective(
            user.role_id,
            property_id,
            overrides,
            [role] if role else [],
            user.is_super_admin,
        )
        return permission_key in effective
