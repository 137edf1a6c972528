import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Account, Budget, Category, Transaction
from spendwise.routers.deps import clamp, month_window
from spendwise.schemas.common import MONTH
from spendwise.services import metrics
from spendwise.services.gamification import gamification_service
from spendwise.services.periods import current_month_bounds, months_ago, today, trailing_months_start

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_TREND_MONTHS = 24
HEALTH_WINDOW_MONTHS = 3


@router.get("/trends")
def trends(months: int = Query(6), user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    months = clamp(months, 1, MAX_TREND_MONTHS)
    start = trailing_months_start(today(), months)

    rows = db.query(Transaction.amount, Transaction.type, Transaction.txn_date).filter(
        Transaction.user_id == user_id,
        Transaction.txn_date >= start
    ).all()
    return metrics.monthly_trends([
        {"amount": r.amount, "type": r.type, "txn_date": r.txn_date} for r in rows
    ])


@router.get("/patterns")
def patterns(month: str = Query(None, pattern=MONTH), user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    start, end = month_window(month) if month else current_month_bounds(today())

    rows = db.query(
        Transaction.amount,
        Transaction.txn_date,
        Transaction.emotion,
        Category.name.label("category_name"),
        Category.color.label("category_color"),
        Category.icon.label("category_icon"),
    ).outerjoin(Category, Transaction.category_id == Category.id).filter(
        Transaction.user_id == user_id,
        Transaction.type == "expense",
        Transaction.txn_date >= start,
        Transaction.txn_date <= end
    ).order_by(Transaction.txn_date.asc(), Transaction.created_at.asc()).all()

    return metrics.spending_patterns([dict(r._mapping) for r in rows])


@router.get("/health-score")
def health_score(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    since = months_ago(today(), HEALTH_WINDOW_MONTHS)

    accounts = db.query(Account).filter(Account.user_id == user_id, Account.is_active.is_(True)).all()
    transactions = db.query(Transaction).filter(
        Transaction.user_id == user_id,
        Transaction.txn_date >= since
    ).all()
    budgets = db.query(Budget).filter(Budget.user_id == user_id).all()

    result = metrics.health_score(accounts, transactions, budgets)

    stats = gamification_service.get_or_create_stats(db, user_id)
    stats.financial_score = result["score"]
    db.commit()
    logger.debug("Financial score for %s is %s", user_id, result["score"])
    return result
