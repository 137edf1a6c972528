from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow


class Debt(Base):
    __tablename__ = "debts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String, index=True, nullable=False)

    person_name = Column(String(100), nullable=False)
    person_contact = Column(String(200), nullable=True)

    # Positive = they owe the user, negative = the user owes them.
    # The sign is fixed at creation; payments only shrink the magnitude.
    amount = Column(Float, nullable=False)
    original_amount = Column(Float, nullable=False)

    description = Column(String(500), nullable=True)
    due_date = Column(Date, nullable=True)
    is_settled = Column(Boolean, nullable=False, default=False)
    settled_at = Column(DateTime, nullable=True)
    reminder_enabled = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow)

    payments = relationship("DebtPayment", back_populates="debt", cascade="all, delete-orphan")


class DebtPayment(Base):
    __tablename__ = "debt_payments"

    id = Column(Integer, primary_key=True, index=True)
    debt_id = Column(String(36), ForeignKey("debts.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    note = Column(String(500), nullable=True)
    paid_at = Column(DateTime, default=utcnow)

    debt = relationship("Debt", back_populates="payments")
