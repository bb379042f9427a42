# backend/models/item.py
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, JSON, CheckConstraint, Index
from sqlalchemy.orm import relationship
from database import Base, utcnow

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"


# A stored thing owned by one user; items nest through parent_id
class Item(Base):
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("visibility IN ('public', 'private')", name="ck_items_visibility"),
        # Keyset pagination walks (updated_at, id)
        Index("ix_items_updated_at_id", "updated_at", "id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    original_qr_code = Column(String, nullable=True, index=True)

    # Lookup references survive deletion of the lookup row as NULL
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id", ondelete="SET NULL"), nullable=True)
    parent_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, index=True)

    price = Column(Float, nullable=True)
    currency = Column(String(8), nullable=False, default="USD")
    visibility = Column(String(16), nullable=False, default=VISIBILITY_PRIVATE)

    # Ordered "file:{id}" references to upload_files rows
    images = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    category = relationship("Category")
    location = relationship("Location")
    author = relationship("Author")
