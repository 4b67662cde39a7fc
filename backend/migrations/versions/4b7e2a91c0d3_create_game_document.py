"""create game_document table

Revision ID: 4b7e2a91c0d3
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e2a91c0d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Databases bootstrapped with `flask init-db` already have the table
    if 'game_document' in set(insp.get_table_names()):
        return

    op.create_table(
        'game_document',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game_document') as batch_op:
        batch_op.create_index(batch_op.f('ix_game_document_key'), ['key'], unique=True)


def downgrade():
    with op.batch_alter_table('game_document') as batch_op:
        batch_op.drop_index(batch_op.f('ix_game_document_key'))
    op.drop_table('game_document')
