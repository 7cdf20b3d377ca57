"""Repository ports."""

from staffhousing.application.ports.repositories.override_repository import (
    OverrideRepository,
)
from staffhousing.application.ports.repositories.role_repository import RoleRepository
from staffhousing.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "OverrideRepository",
    "RoleRepository",
    "UserRepository",
]
