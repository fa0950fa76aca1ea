"""initial schema: users, verification codes, service area, reports, payments

Revision ID: a1c4e7f2b9d0
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f2b9d0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # ── users ────────────────────────────────────────────────
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('lastname', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=128), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('admin', 'inspector', 'cobrador', name='user_role'),
            nullable=False,
        ),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # ── verification_codes (code strategy) ───────────────────
    op.create_table(
        'verification_codes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'user_id', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('code', sa.String(length=6), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_verification_codes_user_id', 'verification_codes', ['user_id'])

    # ── service area ─────────────────────────────────────────
    op.create_table(
        'subdivisions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'streets',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subdivision_id', sa.Integer(), sa.ForeignKey('subdivisions.id'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_streets_subdivision_id', 'streets', ['subdivision_id'])
    op.create_table(
        'houses',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('house_number', sa.String(length=32), nullable=False),
        sa.Column('inhabited', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_water', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('street_id', sa.Integer(), sa.ForeignKey('streets.id'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_houses_street_id', 'houses', ['street_id'])

    # ── reports ──────────────────────────────────────────────
    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('report_date', sa.Date(), nullable=False),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column(
            'house_id', sa.Integer(),
            sa.ForeignKey('houses.id', ondelete='CASCADE'), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index('ix_reports_house_id', 'reports', ['house_id'])

    # ── payments ─────────────────────────────────────────────
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('subdivision_id', sa.Integer(), sa.ForeignKey('subdivisions.id'), nullable=False),
        sa.Column('street_id', sa.Integer(), sa.ForeignKey('streets.id'), nullable=False),
        sa.Column('house_id', sa.Integer(), nullable=False),
        sa.Column('house_number', sa.String(length=32), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('cobrador_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_payments_subdivision_id', 'payments', ['subdivision_id'])
    op.create_index('ix_payments_street_id', 'payments', ['street_id'])
    op.create_index('ix_payments_house_id', 'payments', ['house_id'])
    op.create_index('ix_payments_cobrador_id', 'payments', ['cobrador_id'])


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('reports')
    op.drop_table('houses')
    op.drop_table('streets')
    op.drop_table('subdivisions')
    op.drop_table('verification_codes')
    op.drop_table('users')
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
