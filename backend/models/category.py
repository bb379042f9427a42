# backend/models/category.py
from sqlalchemy import Column, Integer, String, DateTime, Index
from database import Base, utcnow


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (Index("ix_categories_name_id", "name", "id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    # Optional hex colour shown next to the category name
    color = Column(String(16), nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
