"""companies and jobs tables

Revision ID: 0001_companies_and_jobs
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_companies_and_jobs"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("handle", sa.String(25), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("num_employees", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.CheckConstraint("handle = lower(handle)", name="ck_companies_handle_lower"),
        sa.CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )
    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=True),
        sa.Column("equity", sa.Numeric(), nullable=True),
        sa.Column(
            "company_handle",
            sa.String(25),
            sa.ForeignKey("companies.handle", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        sa.CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )
    op.create_index("ix_jobs_company_handle", "jobs", ["company_handle"])


def downgrade() -> None:
    op.drop_index("ix_jobs_company_handle", table_name="jobs")
    op.drop_table("jobs")
    op.drop_table("companies")
