"""Application ports - interfaces for external adapters."""

from staffhousing.application.ports.permission_checker import PermissionChecker
from staffhousing.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
