import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Budget, Category, Transaction
from spendwise.schemas.budget import BudgetCreate, BudgetOut, BudgetUpdate
from spendwise.schemas.common import dump
from spendwise.services.metrics import budget_status
from spendwise.services.periods import budget_period_end, budget_start_date, first_of_month, today

logger = logging.getLogger(__name__)

router = APIRouter()


def budget_view(budget: Budget) -> dict:
    return {
        **dump(BudgetOut, budget),
        **budget_status(budget.spent, budget.amount, budget.alert_threshold),
    }


def _owned_budget(db: Session, user_id: str, budget_id: str) -> Budget:
    budget = db.query(Budget).filter(Budget.id == budget_id, Budget.user_id == user_id).first()
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.get("")
def list_budgets(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    budgets = db.query(Budget).options(joinedload(Budget.category)).filter(
        Budget.user_id == user_id
    ).order_by(Budget.created_at.desc()).all()
    return [budget_view(b) for b in budgets]


@router.post("", status_code=201)
def create_budget(payload: BudgetCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    category = db.query(Category).filter(Category.id == payload.category_id, Category.user_id == user_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    existing = db.query(Budget.id).filter(Budget.user_id == user_id, Budget.category_id == category.id).first()
    if existing:
        raise HTTPException(status_code=409, detail="Budget already exists for this category")

    start_date = budget_start_date(payload.period, today())
    end_date = budget_period_end(start_date, payload.period)

    # Expenses already booked in this period count against the new budget
    spent = db.query(func.coalesce(func.sum(Transaction.amount), 0.0)).filter(
        Transaction.user_id == user_id,
        Transaction.type == "expense",
        Transaction.category_id == category.id,
        Transaction.txn_date >= start_date,
        Transaction.txn_date < end_date
    ).scalar()

    budget = Budget(
        user_id=user_id,
        category_id=category.id,
        amount=payload.amount,
        period=payload.period,
        spent=float(spent or 0.0),
        start_date=start_date,
        alert_threshold=payload.alert_threshold,
    )
    db.add(budget)
    db.commit()
    db.refresh(budget)
    logger.info("Budget %s created for category %s (spent %s)", budget.id, category.id, budget.spent)
    return budget_view(budget)


@router.post("/reset")
def reset_monthly_budgets(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    count = db.query(Budget).filter(
        Budget.user_id == user_id,
        Budget.period == "monthly"
    ).update({"spent": 0.0, "start_date": first_of_month(today())}, synchronize_session=False)
    db.commit()
    return {"message": "Monthly budgets reset", "count": count}


@router.patch("/{budget_id}")
def update_budget(budget_id: str, payload: BudgetUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    budget = _owned_budget(db, user_id, budget_id)
    for field, value in payload.changes().items():
        setattr(budget, field, value)
    db.commit()
    db.refresh(budget)
    return budget_view(budget)


@router.delete("/{budget_id}", status_code=204)
def delete_budget(budget_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    budget = _owned_budget(db, user_id, budget_id)
    db.delete(budget)
    db.commit()
    return Response(status_code=204)
