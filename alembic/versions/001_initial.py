"""Initial database schema for the SMS Expense Tracker.

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-17

This migration creates the core tables:
- transactions: Confirmed transactions (SMS-captured and manual)
- app_settings: Key-value store for preferences and the pending review queue
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial schema with transactions and app_settings tables."""

    # Create transactions table
    op.create_table(
        'transactions',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('amount', sa.Numeric, nullable=False),
        sa.Column('direction', sa.String(10), nullable=False),
        sa.Column('occurred_at', sa.TIMESTAMP(timezone=False), nullable=False),
        sa.Column('description', sa.Text),
        sa.Column('bank', sa.String(255)),
        sa.Column('origin', sa.String(10), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=False), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=False), nullable=False),
        sa.CheckConstraint("amount > 0", name='transactions_amount_positive'),
        sa.CheckConstraint("direction IN ('debit', 'credit')", name='transactions_direction_check'),
        sa.CheckConstraint("origin IN ('sms', 'manual')", name='transactions_origin_check')
    )

    # Listing is always ordered by occurrence, then creation time
    op.create_index(
        'idx_transactions_occurred_created',
        'transactions',
        [sa.text('occurred_at DESC'), sa.text('created_at DESC')]
    )

    # Create app_settings table
    op.create_table(
        'app_settings',
        sa.Column('key', sa.String(100), primary_key=True),
        sa.Column('value', sa.Text, nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()'))
    )

    # Add table comments
    op.execute("""
        COMMENT ON TABLE transactions IS 'Confirmed transactions captured from bank SMS or entered manually'
    """)
    op.execute("""
        COMMENT ON TABLE app_settings IS 'Key-value preferences (sms_auto_confirm) and pending review queue (pending_transactions)'
    """)

    # Add column comments
    op.execute("""
        COMMENT ON COLUMN transactions.id IS 'Deterministic tx_<base36> for SMS, random manual_<ms>_<rand> for manual entries'
    """)


def downgrade() -> None:
    """Drop all tables."""

    op.drop_index('idx_transactions_occurred_created', table_name='transactions')

    op.drop_table('app_settings')
    op.drop_table('transactions')
