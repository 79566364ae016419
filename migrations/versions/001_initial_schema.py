"""Initial schema for the beacon data store

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""

import typing as t

from alembic import op
from sqlalchemy.schema import Column
from sqlalchemy.types import DateTime, String, Text

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | t.Sequence[str] | None = None
depends_on: str | t.Sequence[str] | None = None

ID = String(36)


def upgrade() -> None:
    # Organizations
    op.create_table(
        "organizations",
        Column("organization_id", ID, primary_key=True),
        Column("organization_name", String, nullable=False),
        Column("logo_link", String),
        Column("industry", String),
        Column("organization_email", String),
        Column("github_profile", String),
        Column("stock_market_symbol", String),
        Column("tier", String),
        Column("organization_description", Text),
        Column("website", String),
    )
    op.create_table(
        "organization_owners",
        Column("organization_id", ID, primary_key=True),
        Column("user_id", ID, primary_key=True),
    )
    op.create_table(
        "organization_members",
        Column("organization_id", ID, primary_key=True),
        Column("user_id", ID, primary_key=True),
        Column("user_first_name", String),
        Column("user_middle_name", String),
        Column("user_last_name", String),
        Column("user_email", String),
        Column("user_roles", Text, nullable=False, server_default="[]"),
    )

    # Users & applications
    op.create_table(
        "users",
        Column("user_id", ID, primary_key=True),
        Column("first_name", String),
        Column("middle_name", String),
        Column("last_name", String),
        Column("email", String),
        Column("roles", Text, nullable=False, server_default="[]"),
        Column("github_profile", String),
    )
    op.create_table(
        "applications",
        Column("application_id", ID, primary_key=True),
        Column("name", String),
        Column("organization_id", ID),
        Column("application_description", Text),
        Column("programming_language", String),
        Column("tier", String),
        Column("time_of_provisioning", DateTime(timezone=True)),
    )
    op.create_table(
        "credentials",
        Column("user_id", ID, primary_key=True),
        Column("encrypted_password", Text, nullable=False),
        Column("time_created", DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "followings",
        Column("application_id", ID, primary_key=True),
        Column("user_id", ID, primary_key=True),
        Column("time_of_follow", DateTime(timezone=True), nullable=False),
    )

    # Messages
    op.create_table(
        "messages",
        Column("message_id", ID, primary_key=True),
        Column("application_id", ID, nullable=False),
        Column("title", String, nullable=False),
        Column("application_name", String),
        Column("body", Text),
        Column("urgency", String),
        Column("time_of_creation", DateTime(timezone=True)),
        Column("time_message_received", DateTime(timezone=True)),
        Column("hostname", String),
        Column("mac_address", String),
        Column("device_name", String),
        Column("time_of_expiration", DateTime(timezone=True)),
    )
    op.create_index("ix_messages_application_id", "messages", ["application_id"])
    op.create_index("ix_messages_hostname", "messages", ["hostname"])
    op.create_table(
        "inbox",
        Column("user_id", ID, primary_key=True),
        Column("message_id", ID, primary_key=True),
        Column("application_id", ID, nullable=False),
        Column("title", String, nullable=False),
        Column("time_of_expiration", DateTime(timezone=True), nullable=False),
        Column("application_name", String),
        Column("body", Text),
        Column("urgency", String),
        Column("time_of_creation", DateTime(timezone=True)),
        Column("time_message_received", DateTime(timezone=True)),
        Column("hostname", String),
        Column("mac_address", String),
        Column("device_name", String),
    )
    op.create_table(
        "user_devices",
        Column("user_id", ID, primary_key=True),
        Column("serialized_device", String(1024), primary_key=True),
    )


def downgrade() -> None:
    for table in (
        "user_devices",
        "inbox",
        "messages",
        "followings",
        "credentials",
        "applications",
        "users",
        "organization_members",
        "organization_owners",
        "organizations",
    ):
        op.drop_table(table)
