"""Initial schema with assets and nested components

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _inventory_columns() -> list[sa.Column]:
    """Columns shared by assets and components."""
    columns = [
        sa.Column('id', sa.String(20), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('manufacturer', sa.String(255), nullable=True),
        sa.Column('model_number', sa.String(255), nullable=True),
        sa.Column('serial_number', sa.String(255), nullable=True),
        sa.Column('purchase_date', sa.String(32), nullable=True),
        sa.Column('link', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('warranty', sa.JSON(), nullable=True),
        sa.Column('maintenance_events', sa.JSON(), nullable=False),
    ]
    for slot in ('photo', 'receipt', 'manual'):
        columns += [
            sa.Column(f'{slot}_path', sa.Text(), nullable=True),
            sa.Column(f'{slot}_paths', sa.JSON(), nullable=False),
            sa.Column(f'{slot}_info', sa.JSON(), nullable=False),
        ]
    columns += [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    return columns


def upgrade() -> None:
    # Create assets table
    op.create_table(
        'assets',
        *_inventory_columns(),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('secondary_warranty', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)

    # Create components table. Parent links are plain columns: nested
    # components survive the deletion of their asset.
    op.create_table(
        'components',
        *_inventory_columns(),
        sa.Column('parent_id', sa.String(20), nullable=False),
        sa.Column('parent_sub_id', sa.String(20), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_components_id', 'components', ['id'], unique=False)
    op.create_index('ix_components_parent_id', 'components', ['parent_id'], unique=False)
    op.create_index('ix_components_parent_sub_id', 'components', ['parent_sub_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_components_parent_sub_id', table_name='components')
    op.drop_index('ix_components_parent_id', table_name='components')
    op.drop_index('ix_components_id', table_name='components')
    op.drop_table('components')
    op.drop_index('ix_assets_id', table_name='assets')
    op.drop_table('assets')
