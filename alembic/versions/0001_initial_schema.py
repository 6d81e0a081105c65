"""Initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)

    op.create_table(
        "safe_forms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("application_number", sa.String(50), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("applicant_name", sa.String(100), nullable=False),
        sa.Column("applicant_id", sa.String(20), nullable=False),
        sa.Column("applicant_phone", sa.String(20), nullable=False),
        sa.Column("applicant_employee_number", sa.String(50), nullable=False),
        sa.Column("applicant_department", sa.String(100), nullable=False),
        sa.Column("work_company", sa.String(200), nullable=False),
        sa.Column("work_project", sa.String(200), nullable=False),
        sa.Column("work_location", sa.String(500), nullable=False),
        sa.Column("work_type", sa.String(50), nullable=False),
        sa.Column("work_content", sa.Text(), nullable=False),
        sa.Column("work_start_time", sa.DateTime(), nullable=False),
        sa.Column("work_end_time", sa.DateTime(), nullable=False),
        sa.Column("is_product_work", sa.Boolean(), nullable=False),
        sa.Column("product_name", sa.String(200), nullable=True),
        sa.Column("product_specification", sa.String(200), nullable=True),
        sa.Column("product_quantity", sa.String(100), nullable=True),
        sa.Column("work_basis", sa.String(50), nullable=True),
        sa.Column("basis_number", sa.String(100), nullable=True),
        sa.Column("danger_types", sa.JSON(), nullable=False),
        sa.Column("notifier_name", sa.String(100), nullable=False),
        sa.Column("notifier_employee_number", sa.String(50), nullable=False),
        sa.Column("notifier_department", sa.String(100), nullable=False),
        sa.Column("notifier_phone", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_safe_forms_application_number", "safe_forms", ["application_number"], unique=True)
    op.create_index("ix_safe_forms_user_id", "safe_forms", ["user_id"])

    op.create_table(
        "accompanying_persons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "form_id",
            sa.Integer(),
            sa.ForeignKey("safe_forms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("id_number", sa.String(20), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("employee_number", sa.String(50), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_accompanying_persons_form_id", "accompanying_persons", ["form_id"])

    op.create_table(
        "safeformhead",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("applicationNumber", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("idNumber", sa.Text(), nullable=False),
        sa.Column("companyName", sa.Text(), nullable=False),
        sa.Column("phoneNumber", sa.Text(), nullable=False),
        sa.Column("submitTime", sa.Text(), nullable=False),
        sa.Column("startDate", sa.Text(), nullable=False),
        sa.Column("startTime", sa.Text(), nullable=False),
        sa.Column("workingHours", sa.Text(), nullable=False),
        sa.Column("workLocation", sa.Text(), nullable=False),
        sa.Column("workType", sa.Text(), nullable=False),
        sa.Column("isProductWork", sa.Boolean(), nullable=False),
        sa.Column("projectName", sa.Text(), nullable=False),
        sa.Column("vehicleNumber", sa.Text(), nullable=False),
        sa.Column("trackPosition", sa.Text(), nullable=False),
        sa.Column("workContent", sa.Text(), nullable=False),
        sa.Column("workBasis", sa.Text(), nullable=False),
        sa.Column("basisNumber", sa.Text(), nullable=False),
        sa.Column("dangerTypes", sa.Text(), nullable=False),
        sa.Column("notifierName", sa.Text(), nullable=False),
        sa.Column("notifierNumber", sa.Text(), nullable=False),
        sa.Column("notifierDepartment", sa.Text(), nullable=False),
        sa.Column("accompaningCount", sa.Integer(), nullable=False),
    )
    op.create_index("safeformhead_applicationNumber", "safeformhead", ["applicationNumber"], unique=True)

    op.create_table(
        "accompaningpersons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("formApplicationNumber", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("idNumber", sa.Text(), nullable=False),
        sa.Column("phoneNumber", sa.Text(), nullable=False),
    )
    op.create_index(
        "ix_accompaningpersons_formApplicationNumber",
        "accompaningpersons",
        ["formApplicationNumber"],
    )


def downgrade() -> None:
    op.drop_table("accompaningpersons")
    op.drop_table("safeformhead")
    op.drop_table("accompanying_persons")
    op.drop_table("safe_forms")
    op.drop_table("users")
