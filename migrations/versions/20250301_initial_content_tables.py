"""
Create the portfolio tables: users, projects, blog_posts, youtube_videos,
skills and contacts.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = 'content_tables_20250301'
down_revision = None
branch_labels = None
depends_on = None

_TEXT_LIST = sa.JSON().with_variant(postgresql.ARRAY(sa.Text()), 'postgresql')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('project_url', sa.Text(), nullable=True),
        sa.Column('technologies', _TEXT_LIST, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_projects_created_at', 'projects', ['created_at'])

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_blog_posts_created_at', 'blog_posts', ['created_at'])

    op.create_table(
        'youtube_videos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_url', sa.Text(), nullable=False),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_youtube_videos_created_at', 'youtube_videos', ['created_at'])

    op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('percentage', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
    )
    op.create_index('ix_skills_category', 'skills', ['category'])

    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('idx_contacts_is_read', 'contacts', ['is_read'])
    op.create_index('idx_contacts_created_at', 'contacts', ['created_at'])


def downgrade() -> None:
    op.drop_table('contacts')
    op.drop_table('skills')
    op.drop_table('youtube_videos')
    op.drop_table('blog_posts')
    op.drop_table('projects')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
