from sqlalchemy import Boolean, Column, Integer, String

from .base import Base


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(150), nullable=False, unique=True, index=True)
    # Argon2 hash, never the plain password
    password = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
