"""Initial schema: businesses, users, customers, services, service updates

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial_schema'
down_revision = None

service_status = sa.Enum('PENDING', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', name='servicestatus')
service_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'URGENT', name='servicepriority')
user_role = sa.Enum('ADMIN', name='userrole')


def upgrade():
    # Create businesses table (tenant root)
    op.create_table(
        'businesses',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('subdomain', sa.String(63), nullable=False),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('brand_colors', sa.JSON(), nullable=True),
        sa.Column('plan', sa.String(50), nullable=False, server_default='starter'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_businesses_name', 'businesses', ['name'])
    op.create_index('ix_businesses_subdomain', 'businesses', ['subdomain'], unique=True)
    op.create_index('ix_businesses_created_at', 'businesses', ['created_at'])

    # Create users table; id is the identity provider's subject
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False, server_default='ADMIN'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_business_id', 'users', ['business_id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create customers table, unique by email within a business
    op.create_table(
        'customers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('notes', sa.String(5000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('business_id', 'email', name='uq_customer_business_email'),
    )
    op.create_index('ix_customers_business_id', 'customers', ['business_id'])
    op.create_index('ix_customers_email', 'customers', ['email'])
    op.create_index('ix_customers_created_at', 'customers', ['created_at'])

    # Create services table
    op.create_table(
        'services',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id'), nullable=False),
        sa.Column('technician_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.String(5000), nullable=False),
        sa.Column('status', service_status, nullable=False, server_default='PENDING'),
        sa.Column('priority', service_priority, nullable=False, server_default='MEDIUM'),
        sa.Column('estimated_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_services_business_id', 'services', ['business_id'])
    op.create_index('ix_services_customer_id', 'services', ['customer_id'])
    op.create_index('ix_services_technician_id', 'services', ['technician_id'])
    op.create_index('ix_services_status', 'services', ['status'])
    op.create_index('ix_services_created_at', 'services', ['created_at'])

    # Create service_updates table (append-only audit trail)
    op.create_table(
        'service_updates',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('message', sa.String(5000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index('ix_service_updates_service_id', 'service_updates', ['service_id'])
    op.create_index('ix_service_updates_user_id', 'service_updates', ['user_id'])
    op.create_index('ix_service_updates_created_at', 'service_updates', ['created_at'])


def downgrade():
    # Drop in reverse dependency order
    op.drop_table('service_updates')
    op.drop_table('services')
    op.drop_table('customers')
    op.drop_table('users')
    op.drop_table('businesses')

    # Drop enum types
    service_priority.drop(op.get_bind(), checkfirst=True)
    service_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
