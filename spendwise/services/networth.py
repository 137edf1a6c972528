import logging
from datetime import date

from sqlalchemy.orm import Session

from spendwise.models import Account, Debt, NetWorthHistory, Transaction
from spendwise.services.metrics import income_expense, round_half_up
from spendwise.services.periods import current_month_bounds, first_of_month

logger = logging.getLogger(__name__)

LIQUID_TYPES = ("cash", "bank", "e-wallet")


def compute_snapshot(accounts: list, debts: list, transactions: list) -> dict:
    """Aggregate active accounts, unsettled debts and the month's activity into one snapshot row."""
    totals = {
        "total_assets": 0.0,
        "total_liabilities": 0.0,
        "cash_and_bank": 0.0,
        "investments": 0.0,
        "credit_cards": 0.0,
        "loans": 0.0,
        "receivables": 0.0,
        "payables": 0.0,
    }

    for account in accounts:
        balance = account.balance
        if account.is_asset:
            totals["total_assets"] += balance
            if account.type in LIQUID_TYPES:
                totals["cash_and_bank"] += balance
            elif account.type == "investment":
                totals["investments"] += balance
        else:
            totals["total_liabilities"] += abs(balance)
            if account.type == "credit_card":
                totals["credit_cards"] += abs(balance)
            elif account.type == "loan":
                totals["loans"] += abs(balance)

    for debt in debts:
        if debt.amount > 0:
            totals["receivables"] += debt.amount
        else:
            totals["payables"] += abs(debt.amount)

    totals["total_assets"] += totals["receivables"]
    totals["total_liabilities"] += totals["payables"]
    totals["net_worth"] = totals["total_assets"] - totals["total_liabilities"]

    income, expense = income_expense(transactions)
    totals["total_income"] = income
    totals["total_expense"] = expense
    totals["savings_rate"] = round_half_up((income - expense) / income * 100) if income > 0 else 0
    return totals


class NetWorthService:
    def active_accounts(self, db: Session, user_id: str) -> list:
        return db.query(Account).filter(Account.user_id == user_id, Account.is_active.is_(True)).order_by(Account.created_at).all()

    def open_debts(self, db: Session, user_id: str) -> list:
        return db.query(Debt).filter(Debt.user_id == user_id, Debt.is_settled.is_(False)).all()

    def take_snapshot(self, db: Session, user_id: str, today: date) -> tuple:
        """Upsert this month's snapshot. Returns (row, is_update)."""
        snapshot_date = first_of_month(today)
        month_start, month_end = current_month_bounds(today)

        transactions = db.query(Transaction).filter(
            Transaction.user_id == user_id,
            Transaction.txn_date >= month_start,
            Transaction.txn_date <= month_end
        ).all()
        values = compute_snapshot(self.active_accounts(db, user_id), self.open_debts(db, user_id), transactions)

        row = db.query(NetWorthHistory).filter(
            NetWorthHistory.user_id == user_id,
            NetWorthHistory.snapshot_date == snapshot_date
        ).first()
        is_update = row is not None
        if row is None:
            row = NetWorthHistory(user_id=user_id, snapshot_date=snapshot_date)
            db.add(row)
        for field, value in values.items():
            setattr(row, field, value)
        db.flush()

        logger.info("Net worth snapshot %s for %s (%s)", snapshot_date, user_id, "updated" if is_update else "created")
        return row, is_update

    def current(self, db: Session, user_id: str) -> dict:
        accounts = self.active_accounts(db, user_id)
        debts = self.open_debts(db, user_id)

        account_assets = sum(a.balance for a in accounts if a.is_asset)
        account_liabilities = sum(abs(a.balance) for a in accounts if not a.is_asset)
        receivables = sum(d.amount for d in debts if d.amount > 0)
        payables = sum(abs(d.amount) for d in debts if d.amount < 0)

        return {
            "netWorth": account_assets + receivables - account_liabilities - payables,
            "totalAssets": account_assets + receivables,
            "totalLiabilities": account_liabilities + payables,
            "breakdown": {
                "accountAssets": account_assets,
                "receivables": receivables,
                "accountLiabilities": account_liabilities,
                "payables": payables,
            },
            "accounts": [
                {
                    "id": a.id,
                    "name": a.name,
                    "icon": a.icon,
                    "type": a.type,
                    "balance": a.balance,
                    "isAsset": a.is_asset,
                }
                for a in accounts
            ],
        }


networth_service = NetWorthService()
