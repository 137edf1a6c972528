import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Account, Transaction
from spendwise.schemas.account import AccountCreate, AccountOut, AccountUpdate, BalanceAdjustment
from spendwise.schemas.common import dump
from spendwise.services.metrics import account_totals
from spendwise.services.periods import today

logger = logging.getLogger(__name__)

router = APIRouter()


def get_owned_account(db: Session, user_id: str, account_id: str) -> Account:
    account = db.query(Account).filter(Account.id == account_id, Account.user_id == user_id).first()
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.get("")
def list_accounts(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    accounts = db.query(Account).filter(
        Account.user_id == user_id,
        Account.is_active.is_(True)
    ).order_by(Account.created_at.asc()).all()

    totals = account_totals(accounts)
    return {
        "accounts": [dump(AccountOut, a) for a in accounts],
        "summary": {**totals, "accountCount": len(accounts)},
    }


@router.post("", status_code=201)
def create_account(payload: AccountCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    # Liabilities (credit cards, loans) are stored negative
    balance = payload.initial_balance if payload.is_asset else -abs(payload.initial_balance)

    account = Account(
        user_id=user_id,
        name=payload.name,
        type=payload.type,
        icon=payload.icon,
        color=payload.color,
        balance=balance,
        initial_balance=payload.initial_balance,
        is_asset=payload.is_asset,
        institution=payload.institution,
        account_number=payload.account_number,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("Account %s created for %s", account.id, user_id)
    return dump(AccountOut, account)


@router.patch("/{account_id}")
def update_account(account_id: str, payload: AccountUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    account = get_owned_account(db, user_id, account_id)
    for field, value in payload.changes().items():
        setattr(account, field, value)
    db.commit()
    db.refresh(account)
    return dump(AccountOut, account)


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    # Soft delete: history keeps pointing at the account
    account = get_owned_account(db, user_id, account_id)
    account.is_active = False
    db.commit()
    return Response(status_code=204)


@router.patch("/{account_id}/adjust-balance")
def adjust_balance(account_id: str, payload: BalanceAdjustment, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    account = get_owned_account(db, user_id, account_id)
    difference = payload.new_balance - account.balance

    # The correction is kept as a plain transaction so history adds up
    if difference != 0:
        db.add(Transaction(
            user_id=user_id,
            account_id=account.id,
            amount=abs(difference),
            type="income" if difference > 0 else "expense",
            description=payload.reason or "Balance adjustment",
            txn_date=today(),
        ))

    account.balance = payload.new_balance
    db.commit()
    db.refresh(account)
    logger.info("Account %s adjusted by %s", account.id, difference)
    return dump(AccountOut, account)
