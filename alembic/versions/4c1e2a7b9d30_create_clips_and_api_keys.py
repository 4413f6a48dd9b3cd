"""create_clips_and_api_keys

Revision ID: 4c1e2a7b9d30
Revises:
Create Date: 2026-10-19 10:12:44.310562

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e2a7b9d30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create clips and api_keys tables."""
    op.create_table(
        'clips',
        sa.Column('clip_id', sa.String(length=36), primary_key=True),
        sa.Column('shortcode', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('posted', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('expires', sa.DateTime(), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('hits', sa.Integer(), nullable=False, server_default=sa.text('0')),
    )
    op.create_index('ix_clips_shortcode', 'clips', ['shortcode'], unique=True)
    op.create_index('ix_clips_expires', 'clips', ['expires'])

    op.create_table(
        'api_keys',
        sa.Column('api_key', sa.LargeBinary(length=64), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )


def downgrade() -> None:
    """Drop clips and api_keys tables."""
    op.drop_table('api_keys')
    op.drop_index('ix_clips_expires', table_name='clips')
    op.drop_index('ix_clips_shortcode', table_name='clips')
    op.drop_table('clips')
