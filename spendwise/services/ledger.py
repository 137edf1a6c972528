"""
Financial side effects of transactions.

Every change here is a single atomic UPDATE (``col = col + delta``) issued on
the request's session; the caller commits once, so a transaction row and all
of its effects land together or not at all.
"""
import logging
from datetime import date

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from spendwise.models import Account, Budget, Transaction
from spendwise.services.gamification import gamification_service
from spendwise.services.periods import budget_covers

logger = logging.getLogger(__name__)


class LedgerService:

    # ---------- Atomic increments ----------

    def increment_balance(self, db: Session, account_id: str, delta: float) -> None:
        if not delta:
            return
        db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + delta)
            .execution_options(synchronize_session=False)
        )
        logger.debug("Balance of %s moved by %s", account_id, delta)

    def matching_budget_ids(self, db: Session, user_id: str, category_id: int, txn_date: date) -> list:
        """Budgets for the category whose current period window contains the date."""
        candidates = db.query(Budget.id, Budget.start_date, Budget.period).filter(
            Budget.user_id == user_id,
            Budget.category_id == category_id,
            Budget.start_date <= txn_date
        ).all()
        return [row.id for row in candidates if budget_covers(row.start_date, row.period, txn_date)]

    def budget_add_spent(self, db: Session, user_id: str, category_id: int, txn_date: date, amount: float) -> None:
        """Positive amounts accumulate spend, negative ones give it back (never below zero)."""
        if not category_id or not amount:
            return
        budget_ids = self.matching_budget_ids(db, user_id, category_id, txn_date)
        if not budget_ids:
            return

        if amount > 0:
            spent = Budget.spent + amount
        else:
            spent = case((Budget.spent > -amount, Budget.spent + amount), else_=0.0)

        db.execute(
            update(Budget)
            .where(Budget.id.in_(budget_ids))
            .values(spent=spent)
            .execution_options(synchronize_session=False)
        )
        logger.debug("Budgets %s spend moved by %s", budget_ids, amount)

    # ---------- Effects of one transaction ----------

    def apply_balance_effect(self, db: Session, txn_type: str, account_id: str, to_account_id, amount: float) -> None:
        """Apply ``amount`` with the polarity of ``txn_type``; pass a negative amount to reverse."""
        if txn_type == "income":
            self.increment_balance(db, account_id, amount)
        elif txn_type == "expense":
            self.increment_balance(db, account_id, -amount)
        elif txn_type == "transfer" and to_account_id:
            self.increment_balance(db, account_id, -amount)
            self.increment_balance(db, to_account_id, amount)

    def apply_budget_effect(self, db: Session, txn: Transaction, amount: float) -> None:
        if txn.type == "expense" and txn.category_id:
            self.budget_add_spent(db, txn.user_id, txn.category_id, txn.txn_date, amount)

    def record(self, db: Session, txn: Transaction) -> list:
        """
        Insert a transaction with all its side effects:
        balances, budget spend (categorized expenses) and stats.
        Returns badges newly earned.
        """
        db.add(txn)
        db.flush()

        self.apply_balance_effect(db, txn.type, txn.account_id, txn.to_account_id, txn.amount)
        self.apply_budget_effect(db, txn, txn.amount)
        earned = gamification_service.record_transaction(db, txn.user_id, txn.amount, bool(txn.emotion))

        logger.info("Transaction %s recorded (%s %s)", txn.id, txn.type, txn.amount)
        return earned

    def amend(self, db: Session, txn: Transaction, changes: dict) -> None:
        """
        Apply a patch to an existing transaction.

        An amount change moves balances by the signed delta only. For
        expenses the old budget effect is withdrawn and the new one applied,
        which also covers category and date changes.
        """
        old_amount = txn.amount
        old_category_id = txn.category_id
        old_date = txn.txn_date

        for field, value in changes.items():
            setattr(txn, field, value)

        if txn.amount != old_amount:
            self.apply_balance_effect(db, txn.type, txn.account_id, txn.to_account_id, txn.amount - old_amount)

        budget_moved = (txn.amount, txn.category_id, txn.txn_date) != (old_amount, old_category_id, old_date)
        if txn.type == "expense" and budget_moved:
            if old_category_id:
                self.budget_add_spent(db, txn.user_id, old_category_id, old_date, -old_amount)
            if txn.category_id:
                self.budget_add_spent(db, txn.user_id, txn.category_id, txn.txn_date, txn.amount)

        db.flush()
        logger.info("Transaction %s updated (%s)", txn.id, ", ".join(sorted(changes)) or "no changes")

    def remove(self, db: Session, txn: Transaction) -> None:
        """Undo every effect ``record`` applied, then delete the row."""
        self.apply_balance_effect(db, txn.type, txn.account_id, txn.to_account_id, -txn.amount)
        self.apply_budget_effect(db, txn, -txn.amount)
        gamification_service.reverse_transaction(db, txn.user_id, bool(txn.emotion))

        db.delete(txn)
        db.flush()
        logger.info("Transaction %s deleted", txn.id)


ledger_service = LedgerService()
