"""Create clinics table

Revision ID: clinics_initial
Revises:
Create Date: 2026-01-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'clinics_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('clinics',
        sa.Column('id', sa.String(length=36), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('town', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('contact_name', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_clinics_email'), 'clinics', ['email'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_clinics_email'), table_name='clinics')
    op.drop_table('clinics')
