"""Create clinic_documents table

Revision ID: clinic_documents
Revises: clinics_initial
Create Date: 2026-01-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'clinic_documents'
down_revision: Union[str, None] = 'clinics_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('clinic_documents',
        sa.Column('id', sa.String(length=36), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('clinic_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('file_type', sa.String(length=100), nullable=False, server_default='application/octet-stream'),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='other'),
        sa.Column('uploaded_by', sa.String(length=36), nullable=True),
        sa.Column('uploaded_by_name', sa.String(length=255), nullable=False, server_default='Unknown'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['clinic_id'], ['clinics.id'], name='fk_clinic_documents_clinic_id', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('file_path', name='uq_clinic_documents_file_path')
    )
    op.create_index(op.f('ix_clinic_documents_clinic_id'), 'clinic_documents', ['clinic_id'], unique=False)
    op.create_index(op.f('ix_clinic_documents_category'), 'clinic_documents', ['category'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_clinic_documents_category'), table_name='clinic_documents')
    op.drop_index(op.f('ix_clinic_documents_clinic_id'), table_name='clinic_documents')
    op.drop_table('clinic_documents')
