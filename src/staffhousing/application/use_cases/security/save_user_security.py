"""Save user security use case - create or edit a user's access policy."""

from dataclasses import replace

from staffhousing.application.dto.user_security import UserSecurityInput
from staffhousing.application.ports import PermissionChecker
from staffhousing.domain.catalog import unknown_permissions
from staffhousing.domain.entities import OverrideDraft, OverrideSet, User, reconcile
from staffhousing.domain.exceptions import (
    Conflict,
    MinimumAccessViolation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from staffhousing.domain.services import compute_effective, validate_minimum_access
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


def _check_scope(input_data: UserSecurityInput) -> None:
    if not input_data.authorized_properties:
        raise ValidationError("User must be mapped to at least one property")
    if input_data.property_id not in input_data.authorized_properties:
        raise ValidationError(
            "The default property must be included in the user's authorized properties"
        )
    unknown = unknown_permissions(o.permission_key for o in input_data.overrides)
    if unknown:
        raise ValidationError(f"Unknown permission keys: {', '.join(sorted(set(unknown)))}")


def _in_scope(input_data: UserSecurityInput) -> list[OverrideDraft]:
    """Drop overrides for properties the user is no longer scoped to."""
    kept = []
    for override in input_data.overrides:
        if override.property_id in input_data.authorized_properties:
            kept.append(override)
        else:
            log.debug(
                "Dropping override %s for unauthorized property %s",
                override.permission_key,
                override.property_id,
            )
    return kept


class SaveUserSecurityUseCase:
    """Create a user, or edit an existing one's role, property scope and overrides.

    The effective permissions for the default property are resolved and
    validated before anything is written; a failed check blocks the whole save.
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
        input_data: UserSecurityInput,
        user_id: int | None = None,
    ) -> User:
        """Persist the policy. Actor needs USER.CREATE for new users, USER.EDIT otherwise."""
        required = "USER.CREATE" if user_id is None else "USER.EDIT"
        allowed = await self._permission_checker.check(actor_id, acting_property_id, required)
        if not allowed:
            raise PermissionDenied(f"User does not have {required} permission")

        _check_scope(input_data)
        # One draft per (property, permission), last write wins.
        drafts = OverrideSet(user_id, _in_scope(input_data)).drafts()

        async with self._uow_factory() as uow:
            existing = None
            if user_id is not None:
                existing = await uow.users.get_by_id(user_id)
                if not existing:
                    raise NotFound("User", str(user_id))

            was_super_admin = existing.is_super_admin if existing else False
            if input_data.is_super_admin != was_super_admin:
                actor = await uow.users.get_by_id(actor_id)
                if not actor or not actor.is_super_admin:
                    raise PermissionDenied("Only a super admin can change super admin status")

            roles = await uow.roles.list_all()
            if not any(r.id == input_data.role_id for r in roles):
                raise NotFound("Role", str(input_data.role_id))

            effective = compute_effective(
                input_data.role_id,
                input_data.property_id,
                drafts,
                roles,
                input_data.is_super_admin,
            )
            validation = validate_minimum_access(effective)
            if not validation.valid:
                log.warning(
                    "Blocked security change for user %s: %s (property %s)",
                    user_id if user_id is not None else "<new>",
                    validation.error,
                    input_data.property_id,
                )
                raise MinimumAccessViolation(
                    validation.error or "Minimum access requirements not met",
                    property_id=input_data.property_id,
                    user_id=user_id,
                )

            if existing is None:
                username = (input_data.username or "").strip().lower()
                if not username:
                    raise ValidationError("Username is mandatory for new users")
                if await uow.users.get_by_username(username):
                    raise Conflict(f"Username '{username}' already exists")
                user = await uow.users.create(
                    username=username,
                    role_id=input_data.role_id,
                    property_id=input_data.property_id,
                    authorized_properties=frozenset(input_data.authorized_properties),
                    is_super_admin=input_data.is_super_admin,
                )
            else:
                user = replace(
                    existing,
                    role_id=input_data.role_id,
                    property_id=input_data.property_id,
                    authorized_properties=frozenset(input_data.authorized_properties),
                    is_super_admin=input_data.is_super_admin,
                )
                await uow.users.update(user)

            await uow.overrides.replace_for_user(user.id, reconcile(drafts, user.id))

        log.info("Security policy updated for user %s by %s", user.id, actor_id)
        return user
