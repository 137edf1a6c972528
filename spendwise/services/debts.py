import logging

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from spendwise.models import Debt, DebtPayment
from spendwise.models.common import utcnow
from spendwise.services.achievements import achievement_service

logger = logging.getLogger(__name__)


class DebtService:
    def has_active_debts(self, db: Session, user_id: str) -> bool:
        return db.query(Debt.id).filter(Debt.user_id == user_id, Debt.is_settled.is_(False)).first() is not None

    def _mark_settled_if_zero(self, db: Session, debt: Debt) -> bool:
        result = db.execute(
            update(Debt)
            .where(Debt.id == debt.id, Debt.amount == 0, Debt.is_settled.is_(False))
            .values(is_settled=True, settled_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _after_settlement(self, db: Session, user_id: str) -> None:
        if not self.has_active_debts(db, user_id):
            achievement_service.grant(db, user_id, "debt_free")

    def pay(self, db: Session, debt: Debt, amount: float, note: str = None) -> bool:
        """
        Record a payment and shrink the debt's magnitude, keeping its sign.
        Paying more than is outstanding settles the debt at zero.
        Returns whether the debt is settled afterwards.
        """
        db.add(DebtPayment(debt_id=debt.id, amount=amount, note=note))
        db.flush()

        remaining = case(
            (Debt.amount > amount, Debt.amount - amount),
            (Debt.amount < -amount, Debt.amount + amount),
            else_=0.0,
        )
        db.execute(
            update(Debt)
            .where(Debt.id == debt.id)
            .values(amount=remaining)
            .execution_options(synchronize_session=False)
        )
        settled_now = self._mark_settled_if_zero(db, debt)
        db.refresh(debt)

        if settled_now:
            self._after_settlement(db, debt.user_id)

        logger.info("Debt %s paid %s (outstanding %s)", debt.id, amount, debt.amount)
        return debt.is_settled

    def settle(self, db: Session, debt: Debt) -> None:
        # Keep the first settlement time
        if debt.is_settled:
            return
        debt.amount = 0.0
        debt.is_settled = True
        debt.settled_at = utcnow()
        db.flush()
        self._after_settlement(db, debt.user_id)


debt_service = DebtService()
