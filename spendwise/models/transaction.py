from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow

TRANSACTION_TYPES = ("income", "expense", "transfer")


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String, index=True, nullable=False)

    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    # Only set for transfers
    to_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    # Always a positive magnitude, the type gives the direction
    amount = Column(Float, nullable=False)
    type = Column(String(20), nullable=False)
    description = Column(String(500), default="")
    txn_date = Column(Date, nullable=False, index=True)
    emotion = Column(String(10), nullable=True)
    tags = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    account = relationship("Account", foreign_keys=[account_id])
    to_account = relationship("Account", foreign_keys=[to_account_id])
    category = relationship("Category")
