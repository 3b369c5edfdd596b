"""Initial schema — hub tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from __future__ import annotations

from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, tuple[str, ...], None] = None
depends_on: Union[str, tuple[str, ...], None] = None


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    # ── Standalone tables (no FKs) ─────────────────────────────────────

    op.create_table(
        "organisations",
        sa.Column("organisation_name", sa.String(300), nullable=False),
        sa.Column("organisation_type", sa.String(100)),
        sa.Column("industry", sa.String(100)),
        sa.Column("status", sa.String(50)),
        sa.Column("website", sa.String(300)),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(40)),
        sa.Column("billing_address", postgresql.JSONB(astext_type=sa.Text())),
        sa.Column("shipping_address", postgresql.JSONB(astext_type=sa.Text())),
        sa.Column("custom_fields", postgresql.JSONB(astext_type=sa.Text())),
        sa.Column("icon", sa.String(20)),
        sa.Column("color", sa.String(20)),
        sa.Column("notes", sa.Text()),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_organisations_organisation_name", "organisations", ["organisation_name"])

    op.create_table(
        "contacts",
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("full_name", sa.String(201), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(40)),
        sa.Column("mobile", sa.String(40)),
        sa.Column("job_title", sa.String(150)),
        sa.Column("department", sa.String(150)),
        sa.Column("role", sa.String(100)),
        sa.Column("status", sa.String(50)),
        sa.Column("linked_in", sa.String(300)),
        sa.Column("image", sa.String(500), comment="Profile photo URL"),
        sa.Column("notes", sa.Text()),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contacts_full_name", "contacts", ["full_name"])
    op.create_index("ix_contacts_email", "contacts", ["email"])

    op.create_table(
        "quotes",
        sa.Column("quote_number", sa.String(20), nullable=False),
        sa.Column("subject", sa.String(300), nullable=False),
        sa.Column("quote_date", sa.Date(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("organisation_id", postgresql.UUID(as_uuid=True)),
        sa.Column("organisation_name", sa.String(300)),
        sa.Column("contact_id", postgresql.UUID(as_uuid=True)),
        sa.Column("contact_name", sa.String(300)),
        sa.Column("lead_id", postgresql.UUID(as_uuid=True)),
        sa.Column("lead_name", sa.String(300)),
        sa.Column("project_id", postgresql.UUID(as_uuid=True)),
        sa.Column("items", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("subtotal", sa.Numeric(14, 4), nullable=False),
        sa.Column("tax", sa.Numeric(14, 4), nullable=False),
        sa.Column("total", sa.Numeric(14, 4), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("quote_html", sa.Text()),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("quote_number"),
    )
    op.create_index("ix_quotes_status", "quotes", ["status"])
    op.create_index("ix_quotes_organisation_id", "quotes", ["organisation_id"])
    op.create_index("ix_quotes_contact_id", "quotes", ["contact_id"])
    op.create_index("ix_quotes_lead_id", "quotes", ["lead_id"])

    op.create_table(
        "websites",
        sa.Column("domain", sa.String(255), nullable=False),
        sa.Column("organisation_id", postgresql.UUID(as_uuid=True)),
        sa.Column("organisation_name", sa.String(300)),
        sa.Column("status", sa.String(50)),
        sa.Column("cms", sa.String(100)),
        sa.Column("hosting", sa.String(100)),
        sa.Column("ssl_certificate", sa.String(100)),
        sa.Column("notes", sa.Text()),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_websites_domain", "websites", ["domain"])
    op.create_index("ix_websites_organisation_id", "websites", ["organisation_id"])

    op.create_table(
        "leads",
        sa.Column("contact_person", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("organisation_id", postgresql.UUID(as_uuid=True)),
        sa.Column("organisation_name", sa.String(300)),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("source", sa.String(100)),
        sa.Column("notes", sa.Text()),
        sa.Column("contact_ids", postgresql.ARRAY(sa.String(36)), nullable=False, comment="Linked contact ids"),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leads_status", "leads", ["status"])
    op.create_index("ix_leads_organisation_id", "leads", ["organisation_id"])

    op.create_table(
        "form_field_types",
        sa.Column("name", sa.String(100), nullable=False),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # ── Tables with FKs ──────────────────────────────────────────────

    op.create_table(
        "organisation_contacts",
        sa.Column("organisation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("contact_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(100)),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["organisation_id"], ["organisations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["contact_id"], ["contacts.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_organisation_contacts_organisation_id", "organisation_contacts", ["organisation_id"])
    op.create_index("ix_organisation_contacts_contact_id", "organisation_contacts", ["contact_id"])
    op.create_index(
        "uq_organisation_contacts_primary",
        "organisation_contacts",
        ["organisation_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    op.create_table(
        "form_field_values",
        sa.Column("field_type", sa.String(100), nullable=False),
        sa.Column("value", sa.String(200), nullable=False),
        sa.Column("label", sa.String(200), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(astext_type=sa.Text())),
        *_record_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["field_type"], ["form_field_types.name"], ondelete="CASCADE"),
        sa.UniqueConstraint("field_type", "value", name="uq_form_field_values_value"),
    )
    op.create_index("ix_form_field_values_field_type", "form_field_values", ["field_type"])


def downgrade() -> None:
    op.drop_table("form_field_values")
    op.drop_table("organisation_contacts")
    op.drop_table("form_field_types")
    op.drop_table("leads")
    op.drop_table("websites")
    op.drop_table("quotes")
    op.drop_table("contacts")
    op.drop_table("organisations")
