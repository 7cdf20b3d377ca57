"""Get effective permissions use case."""

from staffhousing.application.dto.user_security import EffectivePermissionsOutput
from staffhousing.application.ports import PermissionChecker
from staffhousing.domain.catalog import in_catalog_order
from staffhousing.domain.exceptions import NotFound, PermissionDenied
from staffhousing.domain.services import PermissionExplanation, compute_effective, explain


class GetEffectivePermissionsUseCase:
    """Resolve a user's effective permissions in one property.

    A property outside the user's scope resolves to no permissions.
    Users may read their own permissions; reading anyone else's needs USER.VIEW.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def _authorize(self, actor_id: int, acting_property_id: int, user_id: int) -> None:
        if actor_id == user_id:
            return
        if not await self._permission_checker.check(actor_id, acting_property_id, "USER.VIEW"):
            raise PermissionDenied("User does not have USER.VIEW permission")

    async def _load(self, user_id: int):
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            roles = await uow.roles.list_all()
            overrides = await uow.overrides.list_for_user(user_id)
        return user, roles, overrides

    async def execute(
        self,
        actor_id: int,
        acting_property_id: int,
        user_id: int,
        property_id: int | None = None,
    ) -> EffectivePermissionsOutput:
        """Resolve for property_id, defaulting to the user's default property."""
        await self._authorize(actor_id, acting_property_id, user_id)
        user, roles, overrides = await self._load(user_id)
        target = user.property_id if property_id is None else property_id

        if not user.is_authorized_for(target):
            effective: frozenset[str] = frozenset()
        else:
            effective = compute_effective(
                user.role_id, target, overrides, roles, user.is_super_admin
            )
        return EffectivePermissionsOutput(
            user_id=user.id,
            property_id=target,
            permissions=in_catalog_order(effective),
        )

    async def explain(
        self,
        actor_id: int,
        acting_property_id: int,
        user_id: int,
        permission_key: str,
        property_id: int | None = None,
    ) -> tuple[int, PermissionExplanation]:
        """Explain one permission; returns the resolved property id and the explanation."""
        await self._authorize(actor_id, acting_property_id, user_id)
        user, roles, overrides = await self._load(user_id)
        target = user.property_id if property_id is None else property_id
        if not user.is_authorized_for(target):
            overrides, roles = [], []
        return target, explain(
            permission_key, user.role_id, target, overrides, roles, user.is_super_admin
        )
