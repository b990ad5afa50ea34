"""initial schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-18 09:12:41.503211

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

QUESTION_TYPES = ("CODING", "SYSTEM_DESIGN", "BEHAVIORAL", "THEORY")
VOTE_VALUES = ("UPVOTE", "DOWNVOTE")


def upgrade() -> None:
    """Create the question board tables."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "company",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "question",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("question_type", sa.Enum(*QUESTION_TYPES, name="question_type"), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_question_upvotes_id", "question", ["upvotes", "id"])
    op.create_index("ix_question_last_seen_at_id", "question", ["last_seen_at", "id"])

    op.create_table(
        "question_encounter",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("question_id", sa.String(length=32), nullable=False),
        sa.Column("company_id", sa.String(length=32), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("seen_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["question.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["company.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_question_encounter_question_id", "question_encounter", ["question_id"])
    op.create_index("ix_question_encounter_seen_at", "question_encounter", ["seen_at"])

    op.create_table(
        "question_vote",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("question_id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        sa.Column("vote", sa.Enum(*VOTE_VALUES, name="vote_value"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["question.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("question_id", "user_id", name="uq_question_vote_question_user"),
    )
    op.create_index("ix_question_vote_question_id", "question_vote", ["question_id"])

    for table in ("question_answer", "question_comment"):
        op.create_table(
            table,
            sa.Column("id", sa.String(length=32), nullable=False),
            sa.Column("question_id", sa.String(length=32), nullable=False),
            sa.Column("user_id", sa.String(length=32), nullable=True),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["question_id"], ["question.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_question_id", table, ["question_id"])

    # Full-text search over question content only exists on PostgreSQL.
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            "CREATE INDEX ix_question_content_search ON question "
            "USING gin (to_tsvector('english'::regconfig, content))"
        )


def downgrade() -> None:
    """Drop the question board tables."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP INDEX IF EXISTS ix_question_content_search")
    for table in ("question_comment", "question_answer"):
        op.drop_index(f"ix_{table}_question_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_question_vote_question_id", table_name="question_vote")
    op.drop_table("question_vote")
    op.drop_index("ix_question_encounter_seen_at", table_name="question_encounter")
    op.drop_index("ix_question_encounter_question_id", table_name="question_encounter")
    op.drop_table("question_encounter")
    op.drop_index("ix_question_last_seen_at_id", table_name="question")
    op.drop_index("ix_question_upvotes_id", table_name="question")
    op.drop_table("question")
    op.drop_table("company")
    op.drop_table("user_account")
    sa.Enum(name="vote_value").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="question_type").drop(op.get_bind(), checkfirst=True)
