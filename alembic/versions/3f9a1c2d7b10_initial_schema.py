"""initial schema

Revision ID: 3f9a1c2d7b10
Revises:
Create Date: 2025-08-12 13:32:39.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'columns',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('field_id', sa.String(), nullable=False),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('icon', sa.String(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_columns_field_id', 'columns', ['field_id'], unique=True)

    op.create_table(
        'offers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_offers_created_at', 'offers', ['created_at'])

    op.create_table(
        'offer_values',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column(
            'offer_id',
            sa.String(),
            sa.ForeignKey('offers.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('field_id', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False, server_default=''),
        sa.UniqueConstraint(
            'offer_id', 'field_id', name='offer_values_offer_id_field_id_key'
        ),
    )
    op.create_index('ix_offer_values_offer_id', 'offer_values', ['offer_id'])
    op.create_index('ix_offer_values_field_id', 'offer_values', ['field_id'])


def downgrade() -> None:
    op.drop_table('offer_values')
    op.drop_table('offers')
    op.drop_table('columns')
