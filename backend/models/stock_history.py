# backend/models/stock_history.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from database import Base, utcnow


# Signed quantity delta; the current quantity is always SUM(quantity)
class StockHistory(Base):
    __tablename__ = "stock_histories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    note = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
