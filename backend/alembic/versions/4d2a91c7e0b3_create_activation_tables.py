"""create activation tables

Revision ID: 4d2a91c7e0b3
Revises:
Create Date: 2026-10-19 10:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4d2a91c7e0b3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("provider", sa.String(length=100), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "provider", name="uq_roles_name_provider"),
    )
    op.create_index(op.f("ix_roles_name"), "roles", ["name"], unique=False)
    op.create_index(op.f("ix_roles_provider"), "roles", ["provider"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("provider", sa.String(length=100), nullable=False),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("activation_digest", sa.String(length=128), nullable=True),
        sa.Column("activation_sent_at", sa.DateTime(), nullable=True),
        sa.Column("role_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", "provider", name="uq_users_email_provider"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=False)
    op.create_index(op.f("ix_users_provider"), "users", ["provider"], unique=False)
    op.create_index(op.f("ix_users_activation_digest"), "users", ["activation_digest"], unique=False)
    op.create_index(op.f("ix_users_role_id"), "users", ["role_id"], unique=False)

    op.create_table(
        "provider_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "name", name="uq_provider_settings_provider_name"),
    )
    op.create_index(op.f("ix_provider_settings_provider"), "provider_settings", ["provider"], unique=False)

    op.create_table(
        "auth_attempts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_auth_attempts_provider"), "auth_attempts", ["provider"], unique=False)
    op.create_index(op.f("ix_auth_attempts_email"), "auth_attempts", ["email"], unique=False)
    op.create_index(op.f("ix_auth_attempts_action"), "auth_attempts", ["action"], unique=False)
    op.create_index(op.f("ix_auth_attempts_created_at"), "auth_attempts", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_auth_attempts_created_at"), table_name="auth_attempts")
    op.drop_index(op.f("ix_auth_attempts_action"), table_name="auth_attempts")
    op.drop_index(op.f("ix_auth_attempts_email"), table_name="auth_attempts")
    op.drop_index(op.f("ix_auth_attempts_provider"), table_name="auth_attempts")
    op.drop_table("auth_attempts")

    op.drop_index(op.f("ix_provider_settings_provider"), table_name="provider_settings")
    op.drop_table("provider_settings")

    op.drop_index(op.f("ix_users_role_id"), table_name="users")
    op.drop_index(op.f("ix_users_activation_digest"), table_name="users")
    op.drop_index(op.f("ix_users_provider"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")

    op.drop_index(op.f("ix_roles_provider"), table_name="roles")
    op.drop_index(op.f("ix_roles_name"), table_name="roles")
    op.drop_table("roles")
