"""Permission resolver - role template plus per-property overrides.

Resolution for one (user, property) pair:

1. super admins get the whole catalog; nothing else is consulted;
2. otherwise start from a copy of the base role's permissions
   (an unknown role resolves to no permissions);
3. drop overrides scoped to other properties;
4. apply every deny;
5. apply every grant.

Grants run as a full pass after denies, so if a caller hands in both a deny
and a grant for the same key and property, the grant wins whatever the list
order. The override store keeps one record per (user, property, permission),
which normally makes the two passes indistinguishable from a single one.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from staffhousing.domain.catalog import all_permissions
from staffhousing.domain.entities import OverrideDraft, Role
from staffhousing.domain.value_objects import OverrideState, PermissionSource
from staffhousing.logging_config import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class PermissionExplanation:
    """Resolved value of one permission and what decided it."""

    permission_key: str
    allowed: bool
    source: PermissionSource
    override_state: OverrideState = OverrideState.INHERIT
    role_allows: bool = False


def find_role(all_roles: Iterable[Role], role_id: int) -> Role | None:
    for role in all_roles:
        if role.id == role_id:
            return role
    return None


def overrides_for_property(
    overrides: Iterable[OverrideDraft], property_id: int
) -> list[OverrideDraft]:
    """Overrides scoped to property_id; anything else never leaks in."""
    relevant = []
    for override in overrides:
        if override.property_id == property_id:
            relevant.append(override)
        else:
            log.debug(
                "Skipping override %s for property %s while resolving property %s",
                override.permission_key,
                override.property_id,
                property_id,
            )
    return relevant


def apply_denials(effective: set[str], overrides: Iterable[OverrideDraft]) -> set[str]:
    """First pass: remove every key with a deny override."""
    for override in overrides:
        if not override.is_allowed:
            effective.discard(override.permission_key)
    return effective


def apply_grants(effective: set[str], overrides: Iterable[OverrideDraft]) -> set[str]:
    """Second pass: add every key with a grant override."""
    for override in overrides:
        if override.is_allowed:
            effective.add(override.permission_key)
    return effective


def compute_effective(
    base_role_id: int,
    property_id: int,
    overrides: Iterable[OverrideDraft],
    all_roles: Iterable[Role],
    is_super_admin: bool = False,
) -> frozenset[str]:
    """Effective permission keys for one user in one property.

    Never raises for an unknown role or foreign-property overrides: the former
    resolves to an empty set, the latter are filtered out.
    """
    if is_super_admin:
        return frozenset(all_permissions())

    base_role = find_role(all_roles, base_role_id)
    if base_role is None:
        log.warning("Role %s not found, resolving to no permissions", base_role_id)
        return frozenset()

    relevant = overrides_for_property(overrides, property_id)
    effective = set(base_role.permissions)
    effective = apply_denials(effective, relevant)
    effective = apply_grants(effective, relevant)
    return frozenset(effective)


def explain(
    permission_key: str,
    base_role_id: int,
    property_id: int,
    overrides: Iterable[OverrideDraft],
    all_roles: Iterable[Role],
    is_super_admin: bool = False,
) -> PermissionExplanation:
    """Explain how one permission resolves; agrees with compute_effective."""
    overrides = list(overrides)
    all_roles = list(all_roles)
    allowed = permission_key in compute_effective(
        base_role_id, property_id, overrides, all_roles, is_super_admin
    )
    if is_super_admin:
        return PermissionExplanation(
            permission_key=permission_key,
            allowed=allowed,
            source=PermissionSource.SUPER_ADMIN,
        )

    base_role = find_role(all_roles, base_role_id)
    role_allows = base_role is not None and base_role.has(permission_key)
    matching = [
        o
        for o in overrides_for_property(overrides, property_id)
        if o.permission_key == permission_key
    ]
    if not matching:
        return PermissionExplanation(
            permission_key=permission_key,
            allowed=allowed,
            source=PermissionSource.ROLE,
            role_allows=role_allows,
        )

    state = OverrideState.GRANT if allowed else OverrideState.DENY
    return PermissionExplanation(
        permission_key=permission_key,
        allowed=allowed,
        source=PermissionSource.OVERRIDE,
        override_state=state,
        role_allows=role_allows,
    )
