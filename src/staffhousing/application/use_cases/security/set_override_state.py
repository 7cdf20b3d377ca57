"""Set override state use case - one tri-state change on a stored user."""

from staffhousing.application.ports import PermissionChecker
from staffhousing.domain.catalog import is_known_permission
from staffhousing.domain.entities import OverrideSet, PermissionOverride
from staffhousing.domain.exceptions import (
    MinimumAccessViolation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from staffhousing.domain.services import compute_effective, validate_minimum_access
from staffhousing.domain.value_objects import OverrideState
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


class SetOverrideStateUseCase:
    """Set inherit/grant/deny for one (user, property, permission).

    inherit deletes the override; grant and deny create or replace it.
    The resulting policy must still pass minimum access for the user's
    default property.
    """

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
        user_id: int,
        property_id: int,
        permission_key: str,
        state: OverrideState | str,
    ) -> OverrideState:
        """Apply the state change. Actor must have USER.EDIT."""
        has_edit = await self._permission_checker.check(actor_id, acting_property_id, "USER.EDIT")
        if not has_edit:
            raise PermissionDenied("User does not have USER.EDIT permission")

        if not is_known_permission(permission_key):
            raise ValidationError(f"Unknown permission key: {permission_key}")
        try:
            state = OverrideState(state)
        except ValueError as e:
            raise ValidationError(f"Invalid override state: {state}") from e

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            if not user.is_authorized_for(property_id):
                raise ValidationError(
                    f"Property {property_id} is not in the user's authorized properties"
                )

            pending = OverrideSet(user.id, await uow.overrides.list_for_user(user.id))
            pending.apply(property_id, permission_key, state)

            roles = await uow.roles.list_all()
            effective = compute_effective(
                user.role_id, user.property_id, pending.drafts(), roles, user.is_super_admin
            )
            validation = validate_minimum_access(effective)
            if not validation.valid:
                log.warning(
                    "Blocked override %s=%s for user %s: %s",
                    permission_key,
                    state.value,
                    user.id,
                    validation.error,
                )
                raise MinimumAccessViolation(
                    validation.error or "Minimum access requirements not met",
                    property_id=user.property_id,
                    user_id=user.id,
                )

            if state is OverrideState.INHERIT:
                await uow.overrides.delete(user.id, property_id, permission_key)
            else:
                await uow.overrides.upsert(
                    PermissionOverride(
                        user_id=user.id,
                        property_id=property_id,
                        permission_key=permission_key,
                        is_allowed=state is OverrideState.GRANT,
                    )
                )

        log.info(
            "Override %s for user %s in property %s set to %s by %s",
            permission_key,
            user_id,
            property_id,
            state.value,
            actor_id,
        )
        return state
