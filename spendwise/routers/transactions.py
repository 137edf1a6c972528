import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Account, Category, Transaction
from spendwise.routers.deps import month_window
from spendwise.schemas.common import MONTH, dump
from spendwise.schemas.transaction import TransactionCreate, TransactionOut, TransactionUpdate
from spendwise.services.ledger import ledger_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _active_account(db: Session, user_id: str, account_id: str) -> Account:
    account = db.query(Account).filter(
        Account.id == account_id,
        Account.user_id == user_id,
        Account.is_active.is_(True)
    ).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


def _owned_category(db: Session, user_id: str, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id, Category.user_id == user_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _owned_transaction(db: Session, user_id: str, transaction_id: str) -> Transaction:
    txn = db.query(Transaction).filter(Transaction.id == transaction_id, Transaction.user_id == user_id).first()
    if not txn:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return txn


@router.get("")
def list_transactions(
    month: str = Query(None, pattern=MONTH),
    account_id: str = Query(None, alias="accountId"),
    category_id: int = Query(None, alias="categoryId"),
    type: str = Query(None, pattern="^(income|expense|transfer)$"),
    search: str = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    query = db.query(Transaction).filter(Transaction.user_id == user_id)

    if month:
        start, end = month_window(month)
        query = query.filter(Transaction.txn_date >= start, Transaction.txn_date <= end)
    if account_id:
        query = query.filter(or_(Transaction.account_id == account_id, Transaction.to_account_id == account_id))
    if category_id:
        query = query.filter(Transaction.category_id == category_id)
    if type:
        query = query.filter(Transaction.type == type)
    if search:
        query = query.filter(Transaction.description.ilike(f"%{search}%"))

    total = query.count()
    rows = query.options(
        joinedload(Transaction.account),
        joinedload(Transaction.to_account),
        joinedload(Transaction.category)
    ).order_by(
        Transaction.txn_date.desc(),
        Transaction.created_at.desc()
    ).offset(offset).limit(limit).all()

    return {
        "transactions": [dump(TransactionOut, t) for t in rows],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < total,
        },
    }


@router.post("", status_code=201)
def create_transaction(payload: TransactionCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    account = _active_account(db, user_id, payload.account_id)
    if payload.type == "transfer":
        _active_account(db, user_id, payload.to_account_id)
    if payload.category_id:
        _owned_category(db, user_id, payload.category_id)

    txn = Transaction(
        user_id=user_id,
        account_id=payload.account_id,
        # A destination only means something for transfers
        to_account_id=payload.to_account_id if payload.type == "transfer" else None,
        category_id=payload.category_id,
        amount=payload.amount,
        type=payload.type,
        description=payload.description,
        txn_date=payload.txn_date,
        emotion=payload.emotion or None,
        tags=payload.tags,
    )
    ledger_service.record(db, txn)
    db.commit()

    db.refresh(txn)
    db.refresh(account)
    return {"transaction": dump(TransactionOut, txn), "newBalance": account.balance}


@router.patch("/{transaction_id}")
def update_transaction(transaction_id: str, payload: TransactionUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    txn = _owned_transaction(db, user_id, transaction_id)
    changes = payload.changes()
    if changes.get("category_id"):
        _owned_category(db, user_id, changes["category_id"])

    ledger_service.amend(db, txn, changes)
    db.commit()
    db.refresh(txn)
    return dump(TransactionOut, txn)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    txn = _owned_transaction(db, user_id, transaction_id)
    ledger_service.remove(db, txn)
    db.commit()
    return Response(status_code=204)
