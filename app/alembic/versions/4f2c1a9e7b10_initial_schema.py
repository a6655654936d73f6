"""initial_schema

Revision ID: 4f2c1a9e7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '4f2c1a9e7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

userrole = sa.Enum('customer', 'creator', 'factory', 'admin', name='userrole')
userstatus = sa.Enum('active', 'pending', 'suspended', 'deleted', name='userstatus')
adminlevel = sa.Enum(
    'super_admin', 'admin', 'moderator', 'support', name='adminlevel'
)
verificationstatus = sa.Enum(
    'pending', 'verified', 'rejected', name='verificationstatus'
)
preferredlanguage = sa.Enum('ar', 'en', name='preferredlanguage')
productcategory = sa.Enum(
    'tshirts', 'hoodies', 'totebags', 'mugs', 'other', name='productcategory'
)
currency = sa.Enum('USD', 'EUR', 'GBP', 'AED', 'SAR', name='currency')

ENUMS = (
    userrole,
    userstatus,
    adminlevel,
    verificationstatus,
    preferredlanguage,
    productcategory,
    currency,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column(
            'external_id', sqlmodel.sql.sqltypes.AutoString(length=128),
            nullable=False,
        ),
        sa.Column(
            'email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False
        ),
        sa.Column(
            'display_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column('role', userrole, nullable=False),
        sa.Column('status', userstatus, nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column(
            'profile_image_url', sqlmodel.sql.sqltypes.AutoString(length=1024),
            nullable=True,
        ),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
        sa.Column('profile_completion', sa.Integer(), nullable=False),
        sa.Column('preferred_language', preferredlanguage, nullable=True),
        sa.Column('shipping_addresses', sa.JSON(), nullable=True),
        sa.Column('marketing_preferences', sa.JSON(), nullable=True),
        sa.Column(
            'business_name', sqlmodel.sql.sqltypes.AutoString(length=150),
            nullable=True,
        ),
        sa.Column(
            'business_description', sqlmodel.sql.sqltypes.AutoString(), nullable=True
        ),
        sa.Column('social_media_links', sa.JSON(), nullable=True),
        sa.Column('verification_status', verificationstatus, nullable=True),
        sa.Column(
            'company_name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True
        ),
        sa.Column(
            'company_description', sqlmodel.sql.sqltypes.AutoString(), nullable=True
        ),
        sa.Column(
            'contact_person', sqlmodel.sql.sqltypes.AutoString(length=100),
            nullable=True,
        ),
        sa.Column(
            'business_license', sqlmodel.sql.sqltypes.AutoString(length=50),
            nullable=True,
        ),
        sa.Column('tax_id', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('location', sa.JSON(), nullable=True),
        sa.Column('capabilities', sa.JSON(), nullable=True),
        sa.Column(
            'employee_id', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True
        ),
        sa.Column('admin_level', adminlevel, nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column(
            'department', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column(
            'position', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('employee_id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_external_id', 'users', ['external_id'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])
    # Pending (invited) accounts share the empty external_id
    op.create_index(
        'uq_users_external_id',
        'users',
        ['external_id'],
        unique=True,
        sqlite_where=sa.text("external_id != ''"),
        postgresql_where=sa.text("external_id != ''"),
    )

    op.create_table(
        'base_products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column(
            'title', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False
        ),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'brand', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False
        ),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('category', productcategory, nullable=True),
        sa.Column(
            'material', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True
        ),
        sa.Column('base_cost', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', currency, nullable=False),
        sa.Column(
            'country', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column(
            'main_image', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=True
        ),
        sa.Column('colors', sa.JSON(), nullable=False),
        sa.Column('available_sizes', sa.JSON(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title', 'brand', name='uq_base_products_title_brand'),
        sa.CheckConstraint('base_cost > 0', name='ck_base_products_base_cost_positive'),
    )
    op.create_index('ix_base_products_title', 'base_products', ['title'])
    op.create_index('ix_base_products_brand', 'base_products', ['brand'])
    op.create_index('ix_base_products_category', 'base_products', ['category'])
    op.create_index('ix_base_products_deleted_at', 'base_products', ['deleted_at'])

    op.create_table(
        'printable_areas',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('x', sa.Numeric(10, 2), nullable=False),
        sa.Column('y', sa.Numeric(10, 2), nullable=False),
        sa.Column('width', sa.Numeric(10, 2), nullable=False),
        sa.Column('height', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'mockup_url', sqlmodel.sql.sqltypes.AutoString(length=1024),
            nullable=False,
        ),
        sa.Column('dpi', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('base_product_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['base_product_id'], ['base_products.id'], ondelete='CASCADE'
        ),
        sa.CheckConstraint('x >= 0', name='ck_printable_areas_x'),
        sa.CheckConstraint('y >= 0', name='ck_printable_areas_y'),
        sa.CheckConstraint('width > 0', name='ck_printable_areas_width'),
        sa.CheckConstraint('height > 0', name='ck_printable_areas_height'),
        sa.CheckConstraint('dpi > 0', name='ck_printable_areas_dpi'),
    )
    op.create_index(
        'ix_printable_areas_base_product_id', 'printable_areas', ['base_product_id']
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_printable_areas_base_product_id', table_name='printable_areas')
    op.drop_table('printable_areas')

    for index in ('deleted_at', 'category', 'brand', 'title'):
        op.drop_index(f'ix_base_products_{index}', table_name='base_products')
    op.drop_table('base_products')

    op.drop_index('uq_users_external_id', table_name='users')
    for index in ('deleted_at', 'status', 'role', 'external_id', 'email'):
        op.drop_index(f'ix_users_{index}', table_name='users')
    op.drop_table('users')

    # Enum types outlive their tables on PostgreSQL
    for enum in ENUMS:
        enum.drop(op.get_bind(), checkfirst=True)
