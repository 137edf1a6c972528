import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from spendwise.models import GoalContribution, SavingsGoal
from spendwise.models.common import utcnow
from spendwise.services.achievements import achievement_service

logger = logging.getLogger(__name__)


class GoalService:
    def contribute(self, db: Session, goal: SavingsGoal, amount: float, note: str = None) -> bool:
        """
        Record a contribution and grow the goal atomically.
        Completion is one-way; returns whether the goal is complete afterwards.
        """
        db.add(GoalContribution(goal_id=goal.id, amount=amount, note=note))
        db.flush()

        db.execute(
            update(SavingsGoal)
            .where(SavingsGoal.id == goal.id)
            .values(current_amount=SavingsGoal.current_amount + amount)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            update(SavingsGoal)
            .where(
                SavingsGoal.id == goal.id,
                SavingsGoal.is_completed.is_(False),
                SavingsGoal.current_amount >= SavingsGoal.target_amount
            )
            .values(is_completed=True, completed_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        db.refresh(goal)

        if goal.is_completed:
            achievement_service.grant(db, goal.user_id, "goal_getter")

        logger.info("Goal %s received %s (now %s / %s)", goal.id, amount, goal.current_amount, goal.target_amount)
        return goal.is_completed


goal_service = GoalService()
