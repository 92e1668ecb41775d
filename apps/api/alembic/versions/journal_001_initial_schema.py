"""Initial journal schema

Revision ID: journal_001
Revises:
Create Date: 2026-10-19

Accounts, athlete profiles, journal entries with their per-sport minute
rows, and monthly reflections.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'journal_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'athlete',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False, unique=True),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'athlete_profile',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('athlete_id', sa.Uuid(), sa.ForeignKey('athlete.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('birth_year', sa.Integer(), nullable=True),
        sa.Column('favorite_sport', sa.String(32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'journal_entry',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('athlete_id', sa.Uuid(), sa.ForeignKey('athlete.id', ondelete='CASCADE'), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('effort', sa.Integer(), nullable=False),
        sa.Column('confidence', sa.Integer(), nullable=False),
        sa.Column('energy', sa.Integer(), nullable=True),
        sa.Column('body_feel_before', sa.String(8), nullable=True),
        sa.Column('body_feel_after', sa.String(8), nullable=True),
        sa.Column('win_today', sa.String(140), nullable=False, server_default=''),
        sa.Column('lesson_today', sa.String(140), nullable=False, server_default=''),
        sa.Column('tomorrow_focus', sa.String(140), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('athlete_id', 'entry_date', name='uq_journal_entry_athlete_date'),
        sa.CheckConstraint('effort BETWEEN 1 AND 5', name='ck_journal_entry_effort_range'),
        sa.CheckConstraint('confidence BETWEEN 1 AND 5', name='ck_journal_entry_confidence_range'),
        sa.CheckConstraint('energy IS NULL OR energy BETWEEN 1 AND 5', name='ck_journal_entry_energy_range'),
    )
    op.create_index('ix_journal_entry_athlete_date', 'journal_entry', ['athlete_id', 'entry_date'])

    op.create_table(
        'entry_sport',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('entry_id', sa.Uuid(), sa.ForeignKey('journal_entry.id', ondelete='CASCADE'), nullable=False),
        sa.Column('athlete_id', sa.Uuid(), sa.ForeignKey('athlete.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sport', sa.String(32), nullable=False),
        sa.Column('minutes', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('minutes BETWEEN 1 AND 600', name='ck_entry_sport_minutes_range'),
    )
    op.create_index('ix_entry_sport_entry_id', 'entry_sport', ['entry_id'])
    op.create_index('ix_entry_sport_athlete_id', 'entry_sport', ['athlete_id'])

    op.create_table(
        'monthly_reflection',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('athlete_id', sa.Uuid(), sa.ForeignKey('athlete.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.String(7), nullable=False),
        sa.Column('biggest_win_month', sa.Text(), nullable=False, server_default=''),
        sa.Column('improve_next_month', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('athlete_id', 'month', name='uq_monthly_reflection_athlete_month'),
    )


def downgrade() -> None:
    op.drop_table('monthly_reflection')
    op.drop_index('ix_entry_sport_athlete_id', table_name='entry_sport')
    op.drop_index('ix_entry_sport_entry_id', table_name='entry_sport')
    op.drop_table('entry_sport')
    op.drop_index('ix_journal_entry_athlete_date', table_name='journal_entry')
    op.drop_table('journal_entry')
    op.drop_table('athlete_profile')
    op.drop_table('athlete')
