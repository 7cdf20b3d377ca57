"""Domain exceptions."""


class StaffHousingError(Exception):
    """Base exception for staff housing."""

    pass


class PermissionDenied(StaffHousingError):
    """Acting user does not have permission for the requested action."""

    pass


class NotFound(StaffHousingError):
    """Requested resource was not found."""

    pass


class Conflict(StaffHousingError):
    """Write would violate a uniqueness constraint (e.g. duplicate role name)."""

    pass


class ValidationError(StaffHousingError):
    """Validation failed for input data."""

    pass


class MinimumAccessViolation(ValidationError):
    """Security change would leave the user without the minimum required access.

    Carries the property whose effective permissions failed validation so the
    caller can point the operator at the role, the overrides or the default
    property selection.
    """

    def __init__(self, message: str, property_id: int, user_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.property_id = property_id
        self.user_id = user_id
