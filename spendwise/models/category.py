from sqlalchemy import Column, Integer, String, DateTime

from spendwise.db.session import Base
from spendwise.models.common import utcnow

CATEGORY_TYPES = ("income", "expense", "transfer")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)

    # Unique per owner, case-insensitively (checked by the handlers)
    name = Column(String(60), nullable=False)
    color = Column(String(7), default="#3b82f6")
    icon = Column(String(10), default="📁")
    type = Column(String(20), nullable=False, default="expense")

    created_at = Column(DateTime, default=utcnow)
