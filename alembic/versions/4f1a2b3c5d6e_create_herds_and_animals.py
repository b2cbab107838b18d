"""create herds and animals tables

Revision ID: 4f1a2b3c5d6e
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a2b3c5d6e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'herds',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('species', sa.String(length=255), nullable=False),
        sa.Column('sex', sa.String(length=6), nullable=False),
        sa.Column('horn_size', sa.Float(), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('health_notes', sa.Text(), nullable=True),
        sa.Column('herd_id', sa.Uuid(), nullable=True),
        # No FK on parent references; parents may be deleted
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.ForeignKeyConstraint(['herd_id'], ['herds.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("sex IN ('Male', 'Female')", name='ck_animals_sex'),
    )
    op.create_index(op.f('ix_animals_species'), 'animals', ['species'], unique=False)
    op.create_index(op.f('ix_animals_herd_id'), 'animals', ['herd_id'], unique=False)
    op.create_index(op.f('ix_animals_sire_id'), 'animals', ['sire_id'], unique=False)
    op.create_index(op.f('ix_animals_dam_id'), 'animals', ['dam_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_animals_dam_id'), table_name='animals')
    op.drop_index(op.f('ix_animals_sire_id'), table_name='animals')
    op.drop_index(op.f('ix_animals_herd_id'), table_name='animals')
    op.drop_index(op.f('ix_animals_species'), table_name='animals')
    op.drop_table('animals')
    op.drop_table('herds')
