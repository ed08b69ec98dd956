"""add categorization columns to hadiths

Revision ID: 3f2a9c1d7e45
Revises:
Create Date: 2026-02-03 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e45'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add category, cluster and evidence keyword columns to hadiths."""
    op.add_column('hadiths', sa.Column('category_id', sa.String(100), nullable=True))
    op.add_column('hadiths', sa.Column('subcategory', sa.String(100), nullable=True))
    op.add_column('hadiths', sa.Column('keywords', JSONB(), nullable=True))
    op.add_column('hadiths', sa.Column('categorized_at', sa.DateTime(), nullable=True))

    op.create_index('ix_hadiths_category_id', 'hadiths', ['category_id'])
    op.create_index('ix_hadiths_subcategory', 'hadiths', ['subcategory'])


def downgrade() -> None:
    """Drop categorization columns from hadiths."""
    op.drop_index('ix_hadiths_subcategory', table_name='hadiths')
    op.drop_index('ix_hadiths_category_id', table_name='hadiths')
    op.drop_column('hadiths', 'categorized_at')
    op.drop_column('hadiths', 'keywords')
    op.drop_column('hadiths', 'subcategory')
    op.drop_column('hadiths', 'category_id')
