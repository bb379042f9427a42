"""Create inventory tables

Revision ID: 3f1c2a9d8e70
Revises: 
Create Date: 2026-10-18 09:12:44.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f1c2a9d8e70'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True):
    columns = [sa.Column('created_at', sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    # Owned lookup tables
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('color', sa.String(length=16), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_user_id', 'categories', ['user_id'])
    op.create_index('ix_categories_name_id', 'categories', ['name', 'id'])

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_locations_id', 'locations', ['id'])
    op.create_index('ix_locations_user_id', 'locations', ['user_id'])
    op.create_index('ix_locations_title_id', 'locations', ['title', 'id'])

    op.create_table(
        'authors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('bio', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_authors_id', 'authors', ['id'])
    op.create_index('ix_authors_user_id', 'authors', ['user_id'])
    op.create_index('ix_authors_name_id', 'authors', ['name', 'id'])

    op.create_table(
        'position_schemas',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('schema', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_position_schemas_id', 'position_schemas', ['id'])
    op.create_index('ix_position_schemas_user_id', 'position_schemas', ['user_id'])
    op.create_index('ix_position_schemas_name_id', 'position_schemas', ['name', 'id'])

    # Items and everything hanging off them
    op.create_table(
        'items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('original_qr_code', sa.String(), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('authors.id', ondelete='SET NULL'), nullable=True),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('currency', sa.String(length=8), nullable=False),
        sa.Column('visibility', sa.String(length=16), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("visibility IN ('public', 'private')", name='ck_items_visibility'),
    )
    op.create_index('ix_items_id', 'items', ['id'])
    op.create_index('ix_items_user_id', 'items', ['user_id'])
    op.create_index('ix_items_original_qr_code', 'items', ['original_qr_code'])
    op.create_index('ix_items_parent_id', 'items', ['parent_id'])
    op.create_index('ix_items_updated_at_id', 'items', ['updated_at', 'id'])

    op.create_table(
        'positions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position_schema_id', sa.Integer(), sa.ForeignKey('position_schemas.id'), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_positions_id', 'positions', ['id'])
    op.create_index('ix_positions_user_id', 'positions', ['user_id'])
    op.create_index('ix_positions_item_id', 'positions', ['item_id'])

    op.create_table(
        'contents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("type IN ('file', 'image', 'video')", name='ck_contents_type'),
    )
    op.create_index('ix_contents_id', 'contents', ['id'])
    op.create_index('ix_contents_item_id', 'contents', ['item_id'])

    op.create_table(
        'stock_histories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('note', sa.String(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index('ix_stock_histories_id', 'stock_histories', ['id'])
    op.create_index('ix_stock_histories_user_id', 'stock_histories', ['user_id'])
    op.create_index('ix_stock_histories_item_id', 'stock_histories', ['item_id'])

    op.create_table(
        'item_whitelists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint('item_id', 'email', name='uq_item_whitelists_item_email'),
    )
    op.create_index('ix_item_whitelists_id', 'item_whitelists', ['id'])
    op.create_index('ix_item_whitelists_item_id', 'item_whitelists', ['item_id'])

    op.create_table(
        'upload_files',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('content_type', sa.String(), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_upload_files_id', 'upload_files', ['id'])
    op.create_index('ix_upload_files_user_id', 'upload_files', ['user_id'])
    op.create_index('ix_upload_files_item_id', 'upload_files', ['item_id'])

    # Account deletion requests and the audit log
    op.create_table(
        'account_deletions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('user_email', sa.String(length=320), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('external_job_ref', sa.String(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("status IN ('pending', 'cancelled', 'completed')", name='ck_account_deletions_status'),
    )
    op.create_index('ix_account_deletions_id', 'account_deletions', ['id'])
    op.create_index('ix_account_deletions_user_id', 'account_deletions', ['user_id'])
    op.create_index(
        'uq_account_deletions_pending_user',
        'account_deletions',
        ['user_id'],
        unique=True,
        sqlite_where=sa.text("status = 'pending'"),
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(), nullable=True),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    for column in ('id', 'ts', 'user_id', 'action', 'resource', 'status'):
        op.create_index(f'ix_logs_{column}', 'logs', [column])


def downgrade() -> None:
    """Downgrade schema."""
    # Children before parents
    for table in (
        'logs', 'account_deletions', 'upload_files', 'item_whitelists', 'stock_histories',
        'contents', 'positions', 'items', 'position_schemas', 'authors', 'locations', 'categories',
    ):
        op.drop_table(table)
