"""User entity - security-relevant view of an application user."""

from dataclasses import dataclass, field


@dataclass
class User:
    """User with base role, default property and property scope."""

    id: int
    username: str
    role_id: int
    property_id: int
    authorized_properties: frozenset[int] = field(default_factory=frozenset)
    is_super_admin: bool = False
    status: str = "active"

    def __post_init__(self) -> None:
        self.authorized_properties = frozenset(self.authorized_properties)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def is_authorized_for(self, property_id: int) -> bool:
        """Super admins reach every property; everyone else only their scope."""
        return self.is_super_admin or property_id in self.authorized_properties
