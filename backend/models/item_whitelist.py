# backend/models/item_whitelist.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from database import Base, utcnow


# Email granted read access to one private item (not to its children)
class ItemWhitelist(Base):
    __tablename__ = "item_whitelists"
    __table_args__ = (
        UniqueConstraint("item_id", "email", name="uq_item_whitelists_item_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    # Always stored lowercase
    email = Column(String(320), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
