"""create parsed_banks

Revision ID: base_0001
Revises:
Create Date: 2026-10-19 10:12:41.508213

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parsed_banks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("source_chars", sa.Integer(), nullable=False),
        sa.Column("question_count", sa.Integer(), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("log", sa.JSON(), nullable=False),
    )
    op.create_index("ix_parsed_banks_created_at", "parsed_banks", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_parsed_banks_created_at", table_name="parsed_banks")
    op.drop_table("parsed_banks")
