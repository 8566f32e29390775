"""Create employees and attendance_records tables

Revision ID: 001_attendance_tables
Revises: None
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = '001_attendance_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing = sa.inspect(bind).get_table_names()

    if 'employees' not in existing:
        op.create_table(
            'employees',
            sa.Column('employee_id', sa.String(7), primary_key=True),
            sa.Column('is_punched_in', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('last_action_time', sa.DateTime(timezone=True), nullable=True),
            sa.Column('last_action_type', sa.String(8), nullable=True),
            sa.Column('last_location_latitude', sa.Float(), nullable=True),
            sa.Column('last_location_longitude', sa.Float(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )

    if 'attendance_records' not in existing:
        op.create_table(
            'attendance_records',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('employee_id', sa.String(7), sa.ForeignKey('employees.employee_id'), nullable=False),
            sa.Column('punch_type', sa.String(8), nullable=False),
            sa.Column('punch_time', sa.DateTime(timezone=True), nullable=False),
            sa.Column('image_data', sa.Text(), nullable=True),
            sa.Column('latitude', sa.Float(), nullable=True),
            sa.Column('longitude', sa.Float(), nullable=True),
        )
        op.create_index('ix_attendance_records_id', 'attendance_records', ['id'])
        op.create_index('ix_attendance_records_employee_id', 'attendance_records', ['employee_id'])
        op.create_index('ix_attendance_records_punch_time', 'attendance_records', ['punch_time'])


def downgrade():
    op.drop_index('ix_attendance_records_punch_time', table_name='attendance_records')
    op.drop_index('ix_attendance_records_employee_id', table_name='attendance_records')
    op.drop_index('ix_attendance_records_id', table_name='attendance_records')
    op.drop_table('attendance_records')
    op.drop_table('employees')
