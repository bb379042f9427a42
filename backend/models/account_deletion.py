# backend/models/account_deletion.py
from sqlalchemy import Column, Integer, String, DateTime, Index, CheckConstraint, text
from database import Base, utcnow

STATUS_PENDING = "pending"
STATUS_CANCELLED = "cancelled"
STATUS_COMPLETED = "completed"


# Account deletion request: pending -> completed | cancelled
class AccountDeletion(Base):
    __tablename__ = "account_deletions"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'cancelled', 'completed')", name="ck_account_deletions_status"),
        # At most one pending request per user
        Index(
            "uq_account_deletions_pending_user",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    user_email = Column(String(320), nullable=True)
    status = Column(String(16), nullable=False, default=STATUS_PENDING)
    scheduled_at = Column(DateTime, nullable=False)

    # Message id returned by the delayed-callback service
    external_job_ref = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
