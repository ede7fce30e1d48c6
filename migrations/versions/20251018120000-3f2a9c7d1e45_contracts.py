"""Contracts, payment records and annual payment schedules

Revision ID: 3f2a9c7d1e45
Revises:
Create Date: 2025-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c7d1e45'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

payment_cycle_enum = "paymentcycle"
payment_cycle_enum_values = ['MONTHLY', 'QUARTERLY', 'SEMIANNUALLY', 'ANNUALLY']


def create_enum(name: str, values: list):
    """Create an enum type safely."""
    enum = postgresql.ENUM(*values, name=name, create_type=False)
    enum.create(op.get_bind(), checkfirst=True)
    return enum


def upgrade() -> None:
    """Upgrade schema."""
    cycle_enum = create_enum(payment_cycle_enum, payment_cycle_enum_values)

    op.create_table('contract',
                    sa.Column('created_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('updated_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('contract_internal_id',
                              sqlmodel.sql.sqltypes.AutoString(), nullable=False),
                    sa.Column('property_id',
                              sqlmodel.sql.sqltypes.AutoString(), nullable=False),
                    sa.Column('tenant_id',
                              sqlmodel.sql.sqltypes.AutoString(), nullable=False),
                    sa.Column('start_date', sa.Date(), nullable=True),
                    sa.Column('end_date', sa.Date(), nullable=True),
                    sa.Column('rent_amount', sa.Integer(), nullable=False),
                    sa.Column('payment_cycle', cycle_enum, nullable=False),
                    sa.Column('annual_discount', sa.Boolean(), nullable=False),
                    sa.Column('payment_due_day', sa.Integer(), nullable=False),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index(op.f('ix_contract_contract_internal_id'),
                    'contract', ['contract_internal_id'], unique=False)
    op.create_index(op.f('ix_contract_property_id'),
                    'contract', ['property_id'], unique=False)
    op.create_index(op.f('ix_contract_tenant_id'),
                    'contract', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_contract_end_date'),
                    'contract', ['end_date'], unique=False)

    op.create_table('paymentrecord',
                    sa.Column('created_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('updated_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('contract_id', sa.Integer(), nullable=False),
                    sa.Column('payment_date', sa.Date(), nullable=False),
                    sa.Column('amount', sa.Float(), nullable=False),
                    sa.Column('method',
                              sqlmodel.sql.sqltypes.AutoString(), nullable=False),
                    sa.Column('is_confirmed', sa.Boolean(), nullable=False),
                    sa.ForeignKeyConstraint(
                        ['contract_id'], ['contract.id'],
                        name='fk_paymentrecord_contract_id'
                    ),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index(op.f('ix_paymentrecord_contract_id'),
                    'paymentrecord', ['contract_id'], unique=False)
    op.create_index(op.f('ix_paymentrecord_payment_date'),
                    'paymentrecord', ['payment_date'], unique=False)

    op.create_table('annualpaymentschedule',
                    sa.Column('created_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('updated_at', sa.DateTime(
                        timezone=True), nullable=False),
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('contract_id', sa.Integer(), nullable=False),
                    sa.Column('due_date', sa.Date(), nullable=False),
                    sa.Column('amount', sa.Float(), nullable=False),
                    sa.ForeignKeyConstraint(
                        ['contract_id'], ['contract.id'],
                        name='fk_annualpaymentschedule_contract_id'
                    ),
                    sa.PrimaryKeyConstraint('id')
                    )
    op.create_index(op.f('ix_annualpaymentschedule_contract_id'),
                    'annualpaymentschedule', ['contract_id'], unique=False)

    # ### end Alembic commands ###


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_annualpaymentschedule_contract_id'),
                  table_name='annualpaymentschedule')
    op.drop_table('annualpaymentschedule')
    op.drop_index(op.f('ix_paymentrecord_payment_date'),
                  table_name='paymentrecord')
    op.drop_index(op.f('ix_paymentrecord_contract_id'),
                  table_name='paymentrecord')
    op.drop_table('paymentrecord')
    op.drop_index(op.f('ix_contract_end_date'), table_name='contract')
    op.drop_index(op.f('ix_contract_tenant_id'), table_name='contract')
    op.drop_index(op.f('ix_contract_property_id'), table_name='contract')
    op.drop_index(op.f('ix_contract_contract_internal_id'),
                  table_name='contract')
    op.drop_table('contract')
    postgresql.ENUM(name=payment_cycle_enum).drop(
        op.get_bind(), checkfirst=True)

    # ### end Alembic commands ###
