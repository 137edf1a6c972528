from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow

BUDGET_PERIODS = ("weekly", "monthly", "yearly")


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String, index=True, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    period = Column(String(10), nullable=False, default="monthly")
    # Accumulated by transaction side effects, not derived live
    spent = Column(Float, nullable=False, default=0.0)
    start_date = Column(Date, nullable=False)
    alert_threshold = Column(Float, nullable=False, default=80.0)

    created_at = Column(DateTime, default=utcnow)

    category = relationship("Category")
