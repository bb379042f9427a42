# backend/models/content.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, CheckConstraint
from database import Base, utcnow

CONTENT_TYPES = ("file", "image", "video")


# Attachment metadata for an item; ownership follows the item
class Content(Base):
    __tablename__ = "contents"
    __table_args__ = (
        CheckConstraint("type IN ('file', 'image', 'video')", name="ck_contents_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(16), nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
