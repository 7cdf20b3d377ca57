"""Role entity - reusable bundle of permission keys."""

from dataclasses import dataclass, field

from staffhousing.domain.catalog import unknown_permissions


@dataclass(frozen=True)
class Role:
    """Role template. System roles may be permission-edited but not renamed or deleted."""

    id: int
    name: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    is_system: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "permissions", frozenset(self.permissions))

    def has(self, permission_key: str) -> bool:
        return permission_key in self.permissions

    def unknown_permissions(self) -> list[str]:
        """Permission keys on this role that the catalog does not know."""
        return sorted(unknown_permissions(self.permissions))
