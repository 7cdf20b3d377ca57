"""Permission catalog - the closed, versioned set of permission keys.

Keys are compared by exact, case-sensitive equality. The report keys use the
lower-case ``report.<action>.<report>`` namespace while everything else uses
``MODULE.ACTION``; both forms are kept verbatim.
"""

from collections.abc import Iterable
from types import MappingProxyType

CATALOG_VERSION = 1

MINIMUM_ACCESS_PERMISSION = "DASHBOARD.VIEW"

_REPORTS = ("employees", "housing", "inhouse", "reservations", "maintenance", "audit")

ALL_PERMISSIONS: tuple[str, ...] = (
    "DASHBOARD.VIEW",
    "HOUSING.VIEW",
    "HOUSING.MANAGE",
    "HOUSING.DELETE",
    "EMPLOYEE.VIEW",
    "EMPLOYEE.CREATE",
    "EMPLOYEE.EDIT",
    "EMPLOYEE.DELETE",
    "EMPLOYEE.IMPORT",
    "EMPLOYEE.EXPORT.PDF",
    "EMPLOYEE.EXPORT.EXCEL",
    "RESERVATION.VIEW",
    "RESERVATION.MANAGE",
    "RESERVATION.DELETE",
    "MAINTENANCE.VIEW",
    "MAINTENANCE.MANAGE",
    "MAINTENANCE.DELETE",
    "REPORT.VIEW",
    "REPORT.EXPORT",
    *(
        key
        for report in _REPORTS
        for key in (
            f"report.view.{report}",
            f"report.export.pdf.{report}",
            f"report.export.excel.{report}",
        )
    ),
    "USER.VIEW",
    "USER.CREATE",
    "USER.EDIT",
    "USER.DISABLE",
    "USER.RESET_PASSWORD",
    "ROLE.VIEW",
    "ROLE.MANAGE",
    "PROPERTY.MANAGE",
    "LOG.VIEW",
    "SETTINGS.VIEW",
    "SETTINGS.MANAGE",
)

_POSITION: MappingProxyType[str, int] = MappingProxyType(
    {key: i for i, key in enumerate(ALL_PERMISSIONS)}
)

PERMISSION_GROUPS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "DASHBOARD": ("DASHBOARD.VIEW",),
        "HOUSING": tuple(k for k in ALL_PERMISSIONS if k.startswith("HOUSING.")),
        "EMPLOYEES": tuple(k for k in ALL_PERMISSIONS if k.startswith("EMPLOYEE.")),
        "RESERVATIONS": tuple(k for k in ALL_PERMISSIONS if k.startswith("RESERVATION.")),
        "MAINTENANCE": tuple(k for k in ALL_PERMISSIONS if k.startswith("MAINTENANCE.")),
        "REPORTS": tuple(
            k for k in ALL_PERMISSIONS if k.startswith(("REPORT.", "report."))
        ),
        "USERS & SECURITY": (
            "USER.VIEW",
            "USER.CREATE",
            "USER.EDIT",
            "USER.DISABLE",
            "USER.RESET_PASSWORD",
            "ROLE.VIEW",
            "ROLE.MANAGE",
            "LOG.VIEW",
        ),
        "SYSTEM": ("PROPERTY.MANAGE", "SETTINGS.VIEW", "SETTINGS.MANAGE"),
    }
)


def all_permissions() -> tuple[str, ...]:
    """Every permission key, in catalog order."""
    return ALL_PERMISSIONS


def is_known_permission(key: str) -> bool:
    """True when key is a catalog member (exact match)."""
    return key in _POSITION


def unknown_permissions(keys: Iterable[str]) -> list[str]:
    """Keys that are not catalog members, in input order."""
    return [k for k in keys if k not in _POSITION]


def in_catalog_order(keys: Iterable[str]) -> list[str]:
    """Sort keys for display: catalog members by position, strays last alphabetically."""
    return sorted(keys, key=lambda k: (_POSITION.get(k, len(_POSITION)), k))
