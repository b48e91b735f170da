"""add medication_schedule and consumption_record tables

Revision ID: 3f2c9a7d41b0
Revises:
Create Date: 2026-02-01 10:12:44.503117
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f2c9a7d41b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=80), nullable=True),
        sa.Column('last_name', sa.String(length=80), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'medication_schedule',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('dose_amount', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(length=20), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(timezone=False), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('interval_hours', sa.Integer(), nullable=False),       # hours between doses
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'name', name='uq_medication_schedule_user_name'),
        sa.CheckConstraint('interval_hours >= 1', name='ck_medication_schedule_interval'),
        sa.CheckConstraint('start_date <= end_date', name='ck_medication_schedule_dates'),
    )
    op.create_index('ix_medication_schedule_user_id', 'medication_schedule', ['user_id'])

    op.create_table(
        'consumption_record',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('schedule_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(timezone=False), nullable=False),
        sa.Column('consumed', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['schedule_id'], ['medication_schedule.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'schedule_id', 'date', 'time', name='uq_consumption_record_key'),
    )
    op.create_index('ix_consumption_record_schedule_id', 'consumption_record', ['schedule_id'])
    op.create_index('ix_consumption_record_user_date', 'consumption_record', ['user_id', 'date'])


def downgrade():
    op.drop_index('ix_consumption_record_user_date', table_name='consumption_record')
    op.drop_index('ix_consumption_record_schedule_id', table_name='consumption_record')
    op.drop_table('consumption_record')
    op.drop_index('ix_medication_schedule_user_id', table_name='medication_schedule')
    op.drop_table('medication_schedule')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
