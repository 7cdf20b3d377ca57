"""Access validator - minimum viable access before a security change is saved."""

from collections.abc import Collection
from dataclasses import dataclass

from staffhousing.domain.catalog import MINIMUM_ACCESS_PERMISSION


@dataclass(frozen=True)
class AccessValidation:
    """Verdict; branch on valid, error is only a message for humans."""

    valid: bool
    error: str | None = None


@dataclass(frozen=True)
class RequiredPermission:
    """A permission every user must keep in their default property."""

    permission_key: str
    purpose: str


MINIMUM_ACCESS_RULES: tuple[RequiredPermission, ...] = (
    RequiredPermission(MINIMUM_ACCESS_PERMISSION, "to access the dashboard"),
)


def validate_minimum_access(
    effective_permissions: Collection[str],
    rules: tuple[RequiredPermission, ...] = MINIMUM_ACCESS_RULES,
) -> AccessValidation:
    """Check a resolved permission set against the mandatory-permission rules."""
    for rule in rules:
        if rule.permission_key not in effective_permissions:
            return AccessValidation(
                valid=False,
                error=f"User must have '{rule.permission_key}' permission {rule.purpose}.",
            )
    return AccessValidation(valid=True)
