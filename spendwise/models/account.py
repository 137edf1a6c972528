from sqlalchemy import Column, String, Float, Boolean, DateTime

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow

ACCOUNT_TYPES = ("cash", "bank", "e-wallet", "investment", "credit_card", "loan")


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String, index=True, nullable=False)

    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    icon = Column(String(10), default="💳")
    color = Column(String(7), default="#3b82f6")

    # Liabilities (is_asset=False) carry a negative balance
    balance = Column(Float, nullable=False, default=0.0)
    initial_balance = Column(Float, nullable=False, default=0.0)
    is_asset = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)

    institution = Column(String(100), nullable=True)
    account_number = Column(String(50), nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
