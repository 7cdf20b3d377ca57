"""Seeded system roles and the first super admin."""

from staffhousing.domain.catalog import ALL_PERMISSIONS
from staffhousing.domain.entities import Role, User

SUPER_ADMIN_ROLE_ID = 1

_CORE = tuple(k for k in ALL_PERMISSIONS if not k.startswith("report."))

SYSTEM_ROLES: tuple[Role, ...] = (
    Role(SUPER_ADMIN_ROLE_ID, "Super Admin", frozenset(_CORE), is_system=True),
    Role(2, "Admin", frozenset(k for k in _CORE if k != "PROPERTY.MANAGE"), is_system=True),
    Role(
        3,
        "HR Officer",
        frozenset({
            "DASHBOARD.VIEW",
            "EMPLOYEE.VIEW",
            "EMPLOYEE.CREATE",
            "EMPLOYEE.EDIT",
            "EMPLOYEE.IMPORT",
            "EMPLOYEE.EXPORT.EXCEL",
            "REPORT.VIEW",
        }),
        is_system=True,
    ),
    Role(
        4,
        "Housing Supervisor",
        frozenset({
            "DASHBOARD.VIEW",
            "HOUSING.VIEW",
            "HOUSING.MANAGE",
            "RESERVATION.VIEW",
            "RESERVATION.MANAGE",
            "MAINTENANCE.VIEW",
        }),
        is_system=True,
    ),
    Role(
        5,
        "Engineering",
        frozenset({"DASHBOARD.VIEW", "MAINTENANCE.VIEW", "MAINTENANCE.MANAGE"}),
        is_system=True,
    ),
    Role(
        6,
        "Viewer",
        frozenset({"DASHBOARD.VIEW", "HOUSING.VIEW", "EMPLOYEE.VIEW", "REPORT.VIEW"}),
        is_system=True,
    ),
)

BOOTSTRAP_ADMIN = User(
    id=1,
    username="admin",
    role_id=SUPER_ADMIN_ROLE_ID,
    property_id=1,
    authorized_properties=frozenset({1}),
    is_super_admin=True,
)
