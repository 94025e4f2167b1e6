"""create_coupon_tables

Revision ID: 5b1e0c7d9a21
Revises:
Create Date: 2026-10-19 10:12:41.518203

Creates users, establishments, coupon_templates and redemption_records.

remaining_count carries a >= 0 check so the conditional decrement in the
redemption path can never oversell. redemption_records is unique on
(customer_id, coupon_template_id) and on token.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7d9a21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
    sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
    sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
    sa.Column('document', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
    sa.Column('birthday', sa.Date(), nullable=True),
    sa.Column('avatar_url', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
    sa.Column('role', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    op.create_table('establishments',
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
    sa.Column('document', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
    sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
    sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
    sa.Column('postal_code', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=True),
    sa.Column('city', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=True),
    sa.Column('state', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
    sa.Column('neighborhood', sqlmodel.sql.sqltypes.AutoString(length=120), nullable=True),
    sa.Column('street', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
    sa.Column('number', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=True),
    sa.Column('complement', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_establishments_id'), 'establishments', ['id'], unique=False)
    op.create_index(op.f('ix_establishments_created_at'), 'establishments', ['created_at'], unique=False)
    op.create_index(op.f('ix_establishments_email'), 'establishments', ['email'], unique=False)
    op.create_index(op.f('ix_establishments_user_id'), 'establishments', ['user_id'], unique=True)

    op.create_table('coupon_templates',
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
    sa.Column('description', sa.Text(), server_default='', nullable=False),
    sa.Column('banner_url', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
    sa.Column('discount_kind', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
    sa.Column('discount_value', sa.Numeric(precision=10, scale=2), nullable=False),
    sa.Column('promotion_start', sa.Date(), nullable=True),
    sa.Column('promotion_end', sa.Date(), nullable=True),
    sa.Column('establishment_id', sa.Uuid(), nullable=False),
    sa.Column('owner_snapshot', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
    sa.Column('gallery_urls', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
    sa.Column('remaining_count', sa.Integer(), nullable=False),
    sa.CheckConstraint('remaining_count >= 0', name='ck_coupon_templates_remaining_nonneg'),
    sa.CheckConstraint('discount_value >= 0', name='ck_coupon_templates_value_nonneg'),
    sa.ForeignKeyConstraint(['establishment_id'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_coupon_templates_id'), 'coupon_templates', ['id'], unique=False)
    op.create_index(op.f('ix_coupon_templates_created_at'), 'coupon_templates', ['created_at'], unique=False)
    op.create_index(op.f('ix_coupon_templates_establishment_id'), 'coupon_templates', ['establishment_id'], unique=False)
    op.create_index('ix_coupon_templates_establishment_created', 'coupon_templates', ['establishment_id', 'created_at'], unique=False)

    op.create_table('redemption_records',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('coupon_template_id', sa.Uuid(), nullable=False),
    sa.Column('establishment_id', sa.Uuid(), nullable=False),
    sa.Column('customer_id', sa.Uuid(), nullable=False),
    sa.Column('customer_email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
    sa.Column('customer_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
    sa.Column('customer_phone', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
    sa.Column('token', sqlmodel.sql.sqltypes.AutoString(length=6), nullable=False),
    sa.Column('amount_snapshot', sa.Numeric(precision=10, scale=2), nullable=False),
    sa.Column('discount_kind_snapshot', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
    sa.Column('expiration_date_snapshot', sa.Date(), nullable=True),
    sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
    sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('resolved_by', sa.Uuid(), nullable=True),
    sa.CheckConstraint("status IN ('redeemed','used','expired')", name='ck_redemption_records_status'),
    sa.ForeignKeyConstraint(['coupon_template_id'], ['coupon_templates.id'], ),
    sa.ForeignKeyConstraint(['customer_id'], ['users.id'], ),
    sa.ForeignKeyConstraint(['establishment_id'], ['users.id'], ),
    sa.ForeignKeyConstraint(['resolved_by'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('customer_id', 'coupon_template_id', name='uq_redemption_customer_template'),
    sa.UniqueConstraint('token', name='uq_redemption_token')
    )
    op.create_index(op.f('ix_redemption_records_id'), 'redemption_records', ['id'], unique=False)
    op.create_index(op.f('ix_redemption_records_created_at'), 'redemption_records', ['created_at'], unique=False)
    op.create_index(op.f('ix_redemption_records_coupon_template_id'), 'redemption_records', ['coupon_template_id'], unique=False)
    op.create_index(op.f('ix_redemption_records_establishment_id'), 'redemption_records', ['establishment_id'], unique=False)
    op.create_index(op.f('ix_redemption_records_customer_id'), 'redemption_records', ['customer_id'], unique=False)
    op.create_index(op.f('ix_redemption_records_token'), 'redemption_records', ['token'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_redemption_records_token'), table_name='redemption_records')
    op.drop_index(op.f('ix_redemption_records_customer_id'), table_name='redemption_records')
    op.drop_index(op.f('ix_redemption_records_establishment_id'), table_name='redemption_records')
    op.drop_index(op.f('ix_redemption_records_coupon_template_id'), table_name='redemption_records')
    op.drop_index(op.f('ix_redemption_records_created_at'), table_name='redemption_records')
    op.drop_index(op.f('ix_redemption_records_id'), table_name='redemption_records')
    op.drop_table('redemption_records')
    op.drop_index('ix_coupon_templates_establishment_created', table_name='coupon_templates')
    op.drop_index(op.f('ix_coupon_templates_establishment_id'), table_name='coupon_templates')
    op.drop_index(op.f('ix_coupon_templates_created_at'), table_name='coupon_templates')
    op.drop_index(op.f('ix_coupon_templates_id'), table_name='coupon_templates')
    op.drop_table('coupon_templates')
    op.drop_index(op.f('ix_establishments_user_id'), table_name='establishments')
    op.drop_index(op.f('ix_establishments_email'), table_name='establishments')
    op.drop_index(op.f('ix_establishments_created_at'), table_name='establishments')
    op.drop_index(op.f('ix_establishments_id'), table_name='establishments')
    op.drop_table('establishments')
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
