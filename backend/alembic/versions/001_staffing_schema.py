"""Create staffing schema: employees, projects, assignments, PO amendments

Revision ID: 001
Revises:
Create Date: 2025-01-06

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("employee_code", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True, unique=True),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("designation", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("billability_status", sa.String(), nullable=False, server_default="Bench"),
        sa.Column("last_active_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_employees_id", "employees", ["id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("client", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="Active"),
        sa.Column("po_number", sa.String(), nullable=True),
        sa.Column("budget", sa.Numeric(14, 2), nullable=True),
        sa.Column("currency", sa.String(), nullable=True),
        sa.Column("billing_type", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_projects_id", "projects", ["id"])
    op.create_index("idx_projects_client", "projects", ["client"])
    op.create_index("idx_projects_status", "projects", ["status"])

    op.create_table(
        "employee_projects",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("allocation_percentage", sa.Numeric(5, 2), nullable=False, server_default="100"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("role_in_project", sa.String(), nullable=True),
        sa.Column("po_number", sa.String(), nullable=True),
        sa.Column("billing", sa.String(), nullable=False, server_default="Monthly"),
        sa.Column("rate", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("employee_id", "project_id", name="uq_employee_projects_employee_project"),
    )
    op.create_index("idx_employee_projects_employee", "employee_projects", ["employee_id"])
    op.create_index("idx_employee_projects_project", "employee_projects", ["project_id"])

    op.create_table(
        "po_amendments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("po_number", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("idx_po_amendments_project", "po_amendments", ["project_id"])
    op.create_index("idx_po_amendments_active", "po_amendments", ["is_active"])


def downgrade() -> None:
    op.drop_index("idx_po_amendments_active", table_name="po_amendments")
    op.drop_index("idx_po_amendments_project", table_name="po_amendments")
    op.drop_table("po_amendments")
    op.drop_index("idx_employee_projects_project", table_name="employee_projects")
    op.drop_index("idx_employee_projects_employee", table_name="employee_projects")
    op.drop_table("employee_projects")
    op.drop_index("idx_projects_status", table_name="projects")
    op.drop_index("idx_projects_client", table_name="projects")
    op.drop_index("ix_projects_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_employees_id", table_name="employees")
    op.drop_table("employees")
