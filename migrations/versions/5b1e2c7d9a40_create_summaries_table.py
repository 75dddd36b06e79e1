"""create summaries table

Revision ID: 5b1e2c7d9a40
Revises:
Create Date: 2026-10-16 09:12:41.203318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e2c7d9a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


summary_length = sa.Enum('short', 'medium', 'long', name='summary_length')


def upgrade() -> None:
    """Create the summaries history table."""
    op.create_table(
        'summaries',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('original_filename', sa.String(length=500), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('page_count', sa.Integer(), nullable=True),
        sa.Column('extracted_text', sa.Text(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('summary_length', summary_length, nullable=False, server_default='medium'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_summaries_created_at', 'summaries', ['created_at'])


def downgrade() -> None:
    """Drop the summaries table and its enum type."""
    op.drop_index('ix_summaries_created_at', table_name='summaries')
    op.drop_table('summaries')
    summary_length.drop(op.get_bind(), checkfirst=True)
