"""Permission checker port - per-property authorization."""

from typing import Protocol


class PermissionChecker(Protocol):
    """Port for checking whether a user holds a permission in a property."""

    async def check(self, user_id: int, property_id: int, permission_key: str) -> bool: ...
