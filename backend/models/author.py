# backend/models/author.py
from sqlalchemy import Column, Integer, String, DateTime, Index
from database import Base, utcnow


class Author(Base):
    __tablename__ = "authors"
    __table_args__ = (Index("ix_authors_name_id", "name", "id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String, nullable=False)
    bio = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
