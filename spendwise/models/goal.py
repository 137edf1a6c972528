from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow


class SavingsGoal(Base):
    __tablename__ = "savings_goals"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String, index=True, nullable=False)

    name = Column(String(100), nullable=False)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    target_date = Column(Date, nullable=True)
    icon = Column(String(10), default="🎯")
    color = Column(String(7), default="#22c55e")
    priority = Column(Integer, nullable=False, default=1)
    linked_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=True)

    # One-way: never reset once reached
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    linked_account = relationship("Account")
    contributions = relationship("GoalContribution", back_populates="goal", cascade="all, delete-orphan")


class GoalContribution(Base):
    """Append-only ledger row; the goal's current_amount stays authoritative."""
    __tablename__ = "goal_contributions"

    id = Column(Integer, primary_key=True, index=True)
    goal_id = Column(String(36), ForeignKey("savings_goals.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    note = Column(String(500), nullable=True)
    contributed_at = Column(DateTime, default=utcnow)

    goal = relationship("SavingsGoal", back_populates="contributions")
