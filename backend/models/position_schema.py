# backend/models/position_schema.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index
from database import Base, utcnow


# JSON-Schema document describing the key/value shape of a Position
class PositionSchema(Base):
    __tablename__ = "position_schemas"
    __table_args__ = (Index("ix_position_schemas_name_id", "name", "id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String, nullable=False)
    schema = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
