from sqlalchemy import Column, Integer, String, Float, Date, DateTime, UniqueConstraint

from spendwise.db.session import Base
from spendwise.models.common import utcnow


class UserStats(Base):
    __tablename__ = "user_stats"

    # 1:1 with the owner, created lazily
    user_id = Column(String, primary_key=True)

    level = Column(Integer, nullable=False, default=1)
    xp = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_active = Column(Date, nullable=True)
    total_transactions = Column(Integer, nullable=False, default=0)
    financial_score = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Achievement(Base):
    __tablename__ = "achievements"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_achievements_user_badge"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    badge_id = Column(String(50), nullable=False)
    earned_at = Column(DateTime, default=utcnow)
