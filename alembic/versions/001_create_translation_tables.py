"""create_translation_tables

Revision ID: 001_translations
Revises:
Create Date: 2026-10-16 10:00:00

Create translations, tags and the tag_translation association:
- translations(key, locale) unique - one entry per key per locale
- tag_translation(tag_id, translation_id) unique - no duplicate associations
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_translations'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('key', sa.String(255), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('locale', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('key', 'locale', name='uq_translations_key_locale'),
    )
    # Export queries filter by locale; search filters by key
    op.create_index('ix_translations_locale', 'translations', ['locale'])
    op.create_index('ix_translations_key', 'translations', ['key'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'tag_translation',
        sa.Column('tag_id', sa.Integer(), sa.ForeignKey('tags.id', ondelete='CASCADE'), nullable=False),
        sa.Column('translation_id', sa.Integer(), sa.ForeignKey('translations.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('tag_id', 'translation_id', name='uq_tag_translation'),
    )
    op.create_index('idx_tag_translation_translation', 'tag_translation', ['translation_id'])


def downgrade():
    op.drop_index('idx_tag_translation_translation', table_name='tag_translation')
    op.drop_table('tag_translation')
    op.drop_table('tags')
    op.drop_index('ix_translations_key', table_name='translations')
    op.drop_index('ix_translations_locale', table_name='translations')
    op.drop_table('translations')
