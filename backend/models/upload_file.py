# backend/models/upload_file.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from database import Base, utcnow


# Object-store upload; item_id stays NULL until an item references it
class UploadFile(Base):
    __tablename__ = "upload_files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, index=True)

    key = Column(String, nullable=False)
    filename = Column(String, nullable=False)
    content_type = Column(String, nullable=False)
    size = Column(Integer, nullable=False)

    created_at = Column(DateTime, nullable=False, default=utcnow)
