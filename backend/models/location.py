# backend/models/location.py
from sqlalchemy import Column, Integer, String, Float, DateTime, Index
from database import Base, utcnow


# Named place with coordinates where items are kept
class Location(Base):
    __tablename__ = "locations"
    __table_args__ = (Index("ix_locations_title_id", "title", "id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
