"""Initial schema - role, role_permission, app_user, user_property, overrides.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

from staffhousing.domain.system_roles import BOOTSTRAP_ADMIN, SYSTEM_ROLES

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    role = op.create_table(
        "role",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    role_permission = op.create_table(
        "role_permission",
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_key", sa.String(100), primary_key=True),
    )

    app_user = op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("role.id"), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_app_user_username", "app_user", [sa.text("lower(username)")], unique=True)
    op.create_index("ix_app_user_role_id", "app_user", ["role_id"])

    user_property = op.create_table(
        "user_property",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("property_id", sa.Integer(), primary_key=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    # One override per (user, property, permission); saves upsert on this key.
    op.create_table(
        "user_permission_override",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("property_id", sa.Integer(), primary_key=True),
        sa.Column("permission_key", sa.String(100), primary_key=True),
        sa.Column("is_allowed", sa.Boolean(), nullable=False),
    )

    op.bulk_insert(
        role,
        [{"id": r.id, "name": r.name, "is_system": r.is_system} for r in SYSTEM_ROLES],
    )
    op.bulk_insert(
        role_permission,
        [
            {"role_id": r.id, "permission_key": key}
            for r in SYSTEM_ROLES
            for key in sorted(r.permissions)
        ],
    )
    op.execute("SELECT setval(pg_get_serial_sequence('role', 'id'), (SELECT max(id) FROM role))")

    # Seeded super admin (id 1, property 1).
    op.execute(
        sa.insert(app_user).values(
            id=BOOTSTRAP_ADMIN.id,
            username=BOOTSTRAP_ADMIN.username,
            role_id=BOOTSTRAP_ADMIN.role_id,
            property_id=BOOTSTRAP_ADMIN.property_id,
            is_super_admin=BOOTSTRAP_ADMIN.is_super_admin,
            status=BOOTSTRAP_ADMIN.status,
            created_at=sa.func.now(),
        )
    )
    op.bulk_insert(
        user_property,
        [
            {
                "user_id": BOOTSTRAP_ADMIN.id,
                "property_id": pid,
                "is_default": pid == BOOTSTRAP_ADMIN.property_id,
            }
            for pid in sorted(BOOTSTRAP_ADMIN.authorized_properties)
        ],
    )
    op.execute(
        "SELECT setval(pg_get_serial_sequence('app_user', 'id'), (SELECT max(id) FROM app_user))"
    )


def downgrade() -> None:
    op.drop_table("user_permission_override")
    op.drop_table("user_property")
    op.drop_table("app_user")
    op.drop_table("role_permission")
    op.drop_table("role")
