from sqlalchemy import Column, Index, Integer, String, Text

from ..types import StringList, UTCDateTime
from .base import Base, now_utc


class Project(Base):
    __tablename__ = 'projects'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    project_url = Column(Text, nullable=True)
    technologies = Column(StringList(), nullable=False, default=list)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)

    __table_args__ = (
        Index('idx_projects_created_at', 'created_at'),
    )


class BlogPost(Base):
    __tablename__ = 'blog_posts'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    category = Column(String(100), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc)

    __table_args__ = (
        Index('idx_blog_posts_created_at', 'created_at'),
    )


class YoutubeVideo(Base):
    __tablename__ = 'youtube_videos'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    video_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)

    __table_args__ = (
        Index('idx_youtube_videos_created_at', 'created_at'),
    )


class Skill(Base):
    __tablename__ = 'skills'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    percentage = Column(Integer, nullable=False)
    # frontend | backend | additional (free text accepted)
    category = Column(String(50), nullable=False, index=True)
