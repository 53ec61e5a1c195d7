"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Create the schema from scratch: roles, users, dive_logs.
  - Deleting a role nulls users.role_id; deleting a user nulls
    dive_logs.user_id (orphaned logs stay readable by admins).

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres (this schema is their contract)

Policy:
  - Naming convention:
      pk_<table>                         - Primary keys
      uq_<table>_<col>                   - Unique constraints
      ix_<table>_<col>                   - Indexes
      fk_<table>_<col>__<ref_table>      - Foreign keys
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) ROLES
    # =========================================================
    op.create_table(
        "roles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_roles"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )
    op.create_index("ix_roles_created_at", "roles", ["created_at"])

    # =========================================================
    # 2) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "enabled",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["roles.id"],
            name="fk_users_role_id__roles",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_users_role_id", "users", ["role_id"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # =========================================================
    # 3) DIVE LOGS
    # =========================================================
    op.create_table(
        "dive_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("max_depth", sa.Float, nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("avg_depth", sa.Float, nullable=True),
        sa.Column("water_temperature", sa.Float, nullable=True),
        sa.Column("air_temperature", sa.Float, nullable=True),
        sa.Column("tank_material", sa.String(20), nullable=True),
        sa.Column("tank_volume", sa.Float, nullable=True),
        sa.Column("tank_start_pressure", sa.Float, nullable=True),
        sa.Column("tank_end_pressure", sa.Float, nullable=True),
        sa.Column("water_body", sa.Text, nullable=True),
        sa.Column("visibility", sa.Float, nullable=True),
        sa.Column("additional_info", sa.Text, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_dive_logs"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_dive_logs_user_id__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "tank_material IS NULL OR tank_material IN ('Aluminium', 'Steel')",
            name="ck_dive_logs_tank_material",
        ),
    )
    op.create_index("ix_dive_logs_user_id", "dive_logs", ["user_id"])
    op.create_index("ix_dive_logs_start_time", "dive_logs", ["start_time"])
    op.create_index("ix_dive_logs_created_at", "dive_logs", ["created_at"])


def downgrade() -> None:
    op.drop_table("dive_logs")
    op.drop_table("users")
    op.drop_table("roles")
