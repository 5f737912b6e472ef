"""Dinner scheduling schema

Revision ID: 3b7d2f9a41c8
Revises:
Create Date: 2026-10-19 09:12:41.508317

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7d2f9a41c8'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'family',
        sa.Column('id', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('emoji', sa.String(length=16), nullable=True),
        sa.Column('color', sa.String(length=16), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'rotation_config',
        sa.Column('key', sa.String(length=20), nullable=False),
        sa.Column('host_rotation', sa.JSON(), nullable=False),
        sa.Column('last_host_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )
    op.create_table(
        'dinner',
        sa.Column('date_key', sa.String(length=10), nullable=False),
        sa.Column('confirmed', sa.Boolean(), nullable=False),
        sa.Column('host_id', sa.String(length=20), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['host_id'], ['family.id']),
        sa.PrimaryKeyConstraint('date_key'),
    )
    with op.batch_alter_table('dinner', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_dinner_host_id'), ['host_id'], unique=False)

    op.create_table(
        'dinner_response',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dinner_date', sa.String(length=10), nullable=False),
        sa.Column('family_id', sa.String(length=20), nullable=False),
        sa.Column('state', sa.String(length=10), nullable=False),
        sa.ForeignKeyConstraint(['dinner_date'], ['dinner.date_key'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['family_id'], ['family.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dinner_date', 'family_id', name='uq_dinner_response_family'),
    )
    with op.batch_alter_table('dinner_response', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_dinner_response_dinner_date'), ['dinner_date'], unique=False)

    op.create_table(
        'meal_log',
        sa.Column('dinner_date', sa.String(length=10), nullable=False),
        sa.Column('what', sa.String(length=200), nullable=False),
        sa.Column('recipe', sa.String(length=500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('how', sa.String(length=10), nullable=False),
        sa.Column('saved_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['dinner_date'], ['dinner.date_key'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('dinner_date'),
    )


def downgrade():
    op.drop_table('meal_log')
    with op.batch_alter_table('dinner_response', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_dinner_response_dinner_date'))
    op.drop_table('dinner_response')
    with op.batch_alter_table('dinner', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_dinner_host_id'))
    op.drop_table('dinner')
    op.drop_table('rotation_config')
    op.drop_table('family')
