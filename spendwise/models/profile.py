from sqlalchemy import Column, String, Boolean, DateTime

from spendwise.db.session import Base
from spendwise.models.common import new_uuid, utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    # The identity provider's user id (the owner id everywhere else)
    clerk_id = Column(String, unique=True, index=True, nullable=False)

    email = Column(String, nullable=True)
    full_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    # Personalisation
    display_name = Column(String(100), nullable=True)
    bio = Column(String(500), nullable=True)
    currency = Column(String(3), nullable=False, default="IDR")
    theme = Column(String(10), nullable=False, default="system")
    accent_color = Column(String(7), nullable=False, default="#3b82f6")
    language = Column(String(5), nullable=False, default="id")
    date_format = Column(String(20), nullable=False, default="DD/MM/YYYY")
    notification_budget = Column(Boolean, nullable=False, default=True)
    notification_goals = Column(Boolean, nullable=False, default=True)
    notification_achievements = Column(Boolean, nullable=False, default=True)
    privacy_hide_amounts = Column(Boolean, nullable=False, default=False)
    onboarding_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
