"""Domain services - pure permission resolution and validation."""

from staffhousing.domain.services.access_validator import (
    MINIMUM_ACCESS_RULES,
    AccessValidation,
    RequiredPermission,
    validate_minimum_access,
)
from staffhousing.domain.services.permission_resolver import (
    PermissionExplanation,
    compute_effective,
    explain,
)

__all__ = [
    "MINIMUM_ACCESS_RULES",
    "AccessValidation",
    "PermissionExplanation",
    "RequiredPermission",
    "compute_effective",
    "explain",
    "validate_minimum_access",
]
