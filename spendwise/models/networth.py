from sqlalchemy import Column, Integer, String, Float, Date, DateTime, UniqueConstraint

from spendwise.db.session import Base
from spendwise.models.common import utcnow


class NetWorthHistory(Base):
    """One snapshot per owner per calendar month (snapshot_date = first of month)."""
    __tablename__ = "net_worth_history"
    __table_args__ = (UniqueConstraint("user_id", "snapshot_date", name="uq_net_worth_user_month"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    snapshot_date = Column(Date, nullable=False)

    total_assets = Column(Float, nullable=False, default=0.0)
    total_liabilities = Column(Float, nullable=False, default=0.0)
    net_worth = Column(Float, nullable=False, default=0.0)

    # Breakdown
    cash_and_bank = Column(Float, nullable=False, default=0.0)
    investments = Column(Float, nullable=False, default=0.0)
    receivables = Column(Float, nullable=False, default=0.0)
    credit_cards = Column(Float, nullable=False, default=0.0)
    loans = Column(Float, nullable=False, default=0.0)
    payables = Column(Float, nullable=False, default=0.0)

    # Month activity
    total_income = Column(Float, nullable=False, default=0.0)
    total_expense = Column(Float, nullable=False, default=0.0)
    savings_rate = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=utcnow)
