"""create question and game tables

Revision ID: 5c2e9a7d41b0
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7d41b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    tables = set(insp.get_table_names())
    if 'question' not in tables:
        op.create_table(
            'question',
            sa.Column('id', sa.String(length=64), primary_key=True),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('bound_low', sa.Float(), nullable=False),
            sa.Column('bound_high', sa.Float(), nullable=False),
            sa.CheckConstraint('bound_low <= bound_high', name='ck_question_bounds'),
        )
    if 'game' not in tables:
        op.create_table(
            'game',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('game_id', sa.String(length=64), nullable=False),
            sa.Column('user_id', sa.String(length=128), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('answers', sa.Text(), nullable=False),
        )
        with op.batch_alter_table('game') as batch_op:
            batch_op.create_index('ix_game_game_id', ['game_id'], unique=True)
            batch_op.create_index('ix_game_user_id', ['user_id'], unique=False)


def downgrade():
    with op.batch_alter_table('game') as batch_op:
        batch_op.drop_index('ix_game_user_id')
        batch_op.drop_index('ix_game_game_id')
    op.drop_table('game')
    op.drop_table('question')
