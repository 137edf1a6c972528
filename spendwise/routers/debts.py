import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Debt, DebtPayment
from spendwise.schemas.common import dump
from spendwise.schemas.debt import DebtCreate, DebtOut, Payment, PaymentOut
from spendwise.services.debts import debt_service
from spendwise.services.metrics import debt_status, debt_summary
from spendwise.services.periods import today

logger = logging.getLogger(__name__)

router = APIRouter()


def debt_view(debt: Debt, day=None) -> dict:
    return {
        **dump(DebtOut, debt),
        **debt_status(debt.amount, debt.original_amount, debt.due_date, debt.is_settled, day or today()),
    }


def _owned_debt(db: Session, user_id: str, debt_id: str) -> Debt:
    debt = db.query(Debt).filter(Debt.id == debt_id, Debt.user_id == user_id).first()
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")
    return debt


@router.get("")
def list_debts(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    day = today()
    debts = db.query(Debt).filter(Debt.user_id == user_id).order_by(
        Debt.is_settled.asc(),
        Debt.due_date.is_(None),
        Debt.due_date.asc(),
        Debt.created_at.desc()
    ).all()
    return {
        "debts": [debt_view(d, day) for d in debts],
        "summary": debt_summary(debts, day),
    }


@router.post("", status_code=201)
def create_debt(payload: DebtCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    debt = Debt(user_id=user_id, original_amount=abs(payload.amount), **payload.model_dump())
    db.add(debt)
    db.commit()
    db.refresh(debt)
    logger.info("Debt %s created for %s", debt.id, user_id)
    return debt_view(debt)


@router.post("/{debt_id}/pay")
def pay_debt(debt_id: str, payload: Payment, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    if payload.amount is None or payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Valid payment amount is required")

    debt = _owned_debt(db, user_id, debt_id)
    if debt.is_settled:
        raise HTTPException(status_code=400, detail="Debt is already settled")

    is_settled = debt_service.pay(db, debt, payload.amount, payload.note)
    db.commit()
    db.refresh(debt)

    return {
        "debt": debt_view(debt),
        "payment": {"amount": payload.amount, "note": payload.note},
        "isSettled": is_settled,
    }


@router.get("/{debt_id}/payments")
def list_payments(debt_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    debt = _owned_debt(db, user_id, debt_id)
    rows = db.query(DebtPayment).filter(
        DebtPayment.debt_id == debt.id
    ).order_by(DebtPayment.paid_at.desc(), DebtPayment.id.desc()).all()
    return [dump(PaymentOut, p) for p in rows]


@router.patch("/{debt_id}/settle")
def settle_debt(debt_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    debt = _owned_debt(db, user_id, debt_id)
    debt_service.settle(db, debt)
    db.commit()
    db.refresh(debt)
    return debt_view(debt)


@router.delete("/{debt_id}", status_code=204)
def delete_debt(debt_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    debt = _owned_debt(db, user_id, debt_id)
    db.delete(debt)
    db.commit()
    return Response(status_code=204)
