from sqlalchemy import Boolean, Column, Index, Integer, String, Text

from ..types import UTCDateTime
from .base import Base, now_utc


class Contact(Base):
    __tablename__ = 'contacts'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    is_read = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index('idx_contacts_is_read', 'is_read'),
        Index('idx_contacts_created_at', 'created_at'),
    )
