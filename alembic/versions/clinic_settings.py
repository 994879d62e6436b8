"""Create clinic_settings table and the default-settings trigger on clinics

Revision ID: clinic_settings
Revises: clinic_documents
Create Date: 2026-02-02

"""
import json
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from clinic_admin.defaults import DEFAULT_CLINIC_SETTINGS, DEFAULT_BUSINESS_HOURS


revision: str = 'clinic_settings'
down_revision: Union[str, None] = 'clinic_documents'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _default(name: str) -> sa.TextClause:
    value = DEFAULT_CLINIC_SETTINGS[name]
    if isinstance(value, bool):
        return sa.text('true' if value else 'false')
    return sa.text(str(value))


def upgrade() -> None:
    business_hours_default = json.dumps(DEFAULT_BUSINESS_HOURS).replace("'", "''")

    op.create_table('clinic_settings',
        sa.Column('id', sa.String(length=36), nullable=False, server_default=sa.text('gen_random_uuid()::text')),
        sa.Column('clinic_id', sa.String(length=36), nullable=False),
        sa.Column('required_daily_hours', sa.Numeric(4, 2), nullable=True, server_default=_default('required_daily_hours')),
        sa.Column('unpaid_break_minutes', sa.Integer(), nullable=True, server_default=_default('unpaid_break_minutes')),
        sa.Column('late_threshold_minutes', sa.Integer(), nullable=True, server_default=_default('late_threshold_minutes')),
        sa.Column('overtime_multiplier', sa.Numeric(3, 2), nullable=True, server_default=_default('overtime_multiplier')),
        sa.Column('annual_leave_days', sa.Integer(), nullable=True, server_default=_default('annual_leave_days')),
        sa.Column('sick_leave_days', sa.Integer(), nullable=True, server_default=_default('sick_leave_days')),
        sa.Column('maternity_leave_days', sa.Integer(), nullable=True, server_default=_default('maternity_leave_days')),
        sa.Column('paternity_leave_days', sa.Integer(), nullable=True, server_default=_default('paternity_leave_days')),
        sa.Column('leave_carryover_allowed', sa.Boolean(), nullable=True, server_default=_default('leave_carryover_allowed')),
        sa.Column('business_hours', postgresql.JSONB(), nullable=True, server_default=sa.text(f"'{business_hours_default}'::jsonb")),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['clinic_id'], ['clinics.id'], name='fk_clinic_settings_clinic_id', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('clinic_id', name='uq_clinic_settings_clinic_id')
    )
    op.create_index(op.f('ix_clinic_settings_clinic_id'), 'clinic_settings', ['clinic_id'], unique=False)

    op.execute("""
        CREATE OR REPLACE FUNCTION create_default_clinic_settings()
        RETURNS TRIGGER AS $$
        BEGIN
          INSERT INTO clinic_settings (clinic_id)
          VALUES (NEW.id)
          ON CONFLICT (clinic_id) DO NOTHING;
          RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("DROP TRIGGER IF EXISTS trigger_create_default_clinic_settings ON clinics")
    op.execute("""
        CREATE TRIGGER trigger_create_default_clinic_settings
          AFTER INSERT ON clinics
          FOR EACH ROW
          EXECUTE FUNCTION create_default_clinic_settings()
    """)

    conn = op.get_bind()
    conn.execute(sa.text(
        "INSERT INTO clinic_settings (clinic_id) SELECT id FROM clinics "
        "ON CONFLICT (clinic_id) DO NOTHING"
    ))


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trigger_create_default_clinic_settings ON clinics")
    op.execute("DROP FUNCTION IF EXISTS create_default_clinic_settings()")
    op.drop_index(op.f('ix_clinic_settings_clinic_id'), table_name='clinic_settings')
    op.drop_table('clinic_settings')
