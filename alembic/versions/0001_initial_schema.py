"""lab result store schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "lab_reports",
        sa.Column("doc_id", sa.String(length=36), nullable=False),
        sa.Column("patient_id", sa.String(length=36), nullable=False),
        sa.Column("medical_case_id", sa.String(length=36), nullable=True),
        sa.Column("lab_name", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("report_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("doc_id"),
    )
    op.create_index("ix_lab_reports_patient_id", "lab_reports", ["patient_id"], unique=False)
    op.create_index("ix_lab_reports_medical_case_id", "lab_reports", ["medical_case_id"], unique=False)
    op.create_index("ix_lab_reports_report_date", "lab_reports", ["report_date"], unique=False)

    op.create_table(
        "test_results",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), autoincrement=True, nullable=False),
        sa.Column("doc_id", sa.String(length=36), nullable=False),
        sa.Column("test_name", sa.String(length=255), nullable=True),
        sa.Column("value", sa.String(length=50), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("reference_range", sa.String(length=100), nullable=True),
        sa.Column("is_abnormal", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(["doc_id"], ["lab_reports.doc_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_test_results_doc_id", "test_results", ["doc_id"], unique=False)
    op.create_index("ix_test_results_test_name", "test_results", ["test_name"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_test_results_test_name", table_name="test_results")
    op.drop_index("ix_test_results_doc_id", table_name="test_results")
    op.drop_table("test_results")

    op.drop_index("ix_lab_reports_report_date", table_name="lab_reports")
    op.drop_index("ix_lab_reports_medical_case_id", table_name="lab_reports")
    op.drop_index("ix_lab_reports_patient_id", table_name="lab_reports")
    op.drop_table("lab_reports")
