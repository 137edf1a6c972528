from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Category, Transaction
from spendwise.routers.deps import month_window
from spendwise.schemas.common import MONTH
from spendwise.services.metrics import category_summary

router = APIRouter()


@router.get("")
def monthly_summary(month: str = Query(..., pattern=MONTH), user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    start, end = month_window(month)

    rows = db.query(
        Transaction.amount,
        Transaction.type,
        Category.name.label("category_name"),
        Category.color.label("category_color"),
    ).outerjoin(Category, Transaction.category_id == Category.id).filter(
        Transaction.user_id == user_id,
        Transaction.txn_date >= start,
        Transaction.txn_date <= end
    ).order_by(Transaction.txn_date.asc(), Transaction.created_at.asc()).all()

    return {"month": month, **category_summary([dict(r._mapping) for r in rows])}
