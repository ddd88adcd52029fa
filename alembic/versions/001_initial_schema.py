"""Initial database schema for evaluation events

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""

    event_mode_enum = sa.Enum('STANDARD_EVALUATION', 'SELF_ASSESSMENT', name='eventmode')
    evaluator_status_enum = sa.Enum(
        'INVITED', 'ACCEPTED', 'DECLINED', 'COMPLETED',
        name='evaluatorstatus'
    )

    # Directory tables
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_groups')
    )

    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_teams')
    )

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_subjects')
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email')
    )

    op.create_table(
        'group_memberships',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(64), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_group_memberships'),
        sa.UniqueConstraint('group_id', 'user_id', 'role', name='uq_group_memberships_group_id')
    )

    op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_skills')
    )

    op.create_table(
        'metrics',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('skill_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_metrics')
    )

    # Events table
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('mode', event_mode_enum, nullable=False),
        sa.Column('starts_at', sa.DateTime(), nullable=False),
        sa.Column('ends_at', sa.DateTime(), nullable=False),
        sa.Column('hide_subject_names', sa.Boolean(), nullable=False),
        sa.Column('hide_preferred_positions', sa.Boolean(), nullable=False),
        sa.Column('send_invites', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('locked', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_events')
    )

    # Event link tables
    op.create_table(
        'event_subjects',
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'subject_id', name='pk_event_subjects')
    )

    op.create_table(
        'event_skills',
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('skill_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'skill_id', name='pk_event_skills')
    )

    op.create_table(
        'event_metrics',
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('metric_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['metric_id'], ['metrics.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('event_id', 'metric_id', name='pk_event_metrics')
    )

    # Evaluator assignments table
    op.create_table(
        'evaluator_assignments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('evaluator_id', sa.Integer(), nullable=False),
        sa.Column('status', evaluator_status_enum, nullable=False),
        sa.Column('invitation_sent_at', sa.DateTime(), nullable=True),
        sa.Column('accepted_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['evaluator_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_evaluator_assignments'),
        sa.UniqueConstraint('event_id', 'evaluator_id', name='uq_evaluator_assignments_event_id')
    )

    # Evaluation results table
    op.create_table(
        'evaluation_results',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('subject_id', sa.Integer(), nullable=False),
        sa.Column('evaluator_id', sa.Integer(), nullable=False),
        sa.Column('criterion_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Numeric(10, 4), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('choice_value', sa.Integer(), nullable=True),
        sa.Column('attempt_number', sa.Integer(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['evaluator_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_evaluation_results'),
        sa.UniqueConstraint(
            'event_id', 'subject_id', 'evaluator_id', 'criterion_id',
            name='uq_evaluation_results_event_id'
        )
    )

    # Indexes for performance
    op.create_index('ix_teams_group_id', 'teams', ['group_id'])
    op.create_index('ix_subjects_group_id', 'subjects', ['group_id'])
    op.create_index('ix_group_memberships_group_role', 'group_memberships', ['group_id', 'role'])
    op.create_index('ix_skills_group_id', 'skills', ['group_id'])
    op.create_index('ix_metrics_skill_id', 'metrics', ['skill_id'])
    op.create_index('ix_events_group_id', 'events', ['group_id'])
    op.create_index('ix_events_group_starts', 'events', ['group_id', 'starts_at'])
    op.create_index('ix_events_team_id', 'events', ['team_id'])
    op.create_index(
        'ix_evaluator_assignments_evaluator_id', 'evaluator_assignments', ['evaluator_id']
    )
    op.create_index(
        'ix_evaluation_results_event_evaluator', 'evaluation_results', ['event_id', 'evaluator_id']
    )
    op.create_index(
        'ix_evaluation_results_event_subject', 'evaluation_results', ['event_id', 'subject_id']
    )


def downgrade() -> None:
    """Drop all tables and enums."""

    # Drop tables in reverse order (considering foreign keys)
    op.drop_table('evaluation_results')
    op.drop_table('evaluator_assignments')
    op.drop_table('event_metrics')
    op.drop_table('event_skills')
    op.drop_table('event_subjects')
    op.drop_table('events')
    op.drop_table('metrics')
    op.drop_table('skills')
    op.drop_table('group_memberships')
    op.drop_table('users')
    op.drop_table('subjects')
    op.drop_table('teams')
    op.drop_table('groups')

    # Drop enums
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        op.execute("DROP TYPE IF EXISTS evaluatorstatus")
        op.execute("DROP TYPE IF EXISTS eventmode")
