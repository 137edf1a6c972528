from sqlalchemy import func
from sqlalchemy.orm import Session

from spendwise.models import Category

DEFAULT_CATEGORIES = [
    ("Food & Dining", "#f97316", "🍔", "expense"),
    ("Transportation", "#3b82f6", "🚗", "expense"),
    ("Shopping", "#ec4899", "🛍️", "expense"),
    ("Bills & Utilities", "#eab308", "💡", "expense"),
    ("Entertainment", "#8b5cf6", "🎬", "expense"),
    ("Health", "#ef4444", "💊", "expense"),
    ("Education", "#14b8a6", "📚", "expense"),
    ("Other", "#6b7280", "📦", "expense"),
    ("Salary", "#22c55e", "💰", "income"),
    ("Freelance", "#10b981", "💻", "income"),
    ("Investment Returns", "#0ea5e9", "📈", "income"),
    ("Gifts", "#f43f5e", "🎁", "income"),
    ("Transfer", "#64748b", "🔁", "transfer"),
]


def find_by_name(db: Session, user_id: str, name: str, exclude_id: int = None):
    """Case-insensitive name lookup within one owner's categories."""
    query = db.query(Category).filter(
        Category.user_id == user_id,
        func.lower(Category.name) == name.strip().lower()
    )
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first()


def create_default_categories(db: Session, user_id: str) -> int:
    """Seed the starter set for a new user; names the user already has are skipped."""
    created = 0
    for name, color, icon, category_type in DEFAULT_CATEGORIES:
        if find_by_name(db, user_id, name):
            continue
        db.add(Category(user_id=user_id, name=name, color=color, icon=icon, type=category_type))
        created += 1
    db.flush()
    return created
