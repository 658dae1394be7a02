"""membership roles

Revision ID: 0002_membership_roles
Revises: 0001_tenant_schema
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_membership_roles"
down_revision = "0001_tenant_schema"
branch_labels = None
depends_on = None

ROLES = ("owner", "admin", "manager", "employee")


def upgrade() -> None:
    with op.batch_alter_table("restaurant_admins") as batch_op:
        batch_op.add_column(
            sa.Column(
                "role",
                sa.Enum(*ROLES, name="restaurant_role"),
                nullable=False,
                server_default="admin",
            )
        )


def downgrade() -> None:
    with op.batch_alter_table("restaurant_admins") as batch_op:
        batch_op.drop_column("role")
    sa.Enum(name="restaurant_role").drop(op.get_bind(), checkfirst=True)
