import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session, joinedload

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import Account, GoalContribution, SavingsGoal
from spendwise.schemas.common import dump
from spendwise.schemas.goal import Contribution, ContributionOut, GoalCreate, GoalOut, GoalUpdate
from spendwise.services.goals import goal_service
from spendwise.services.metrics import goal_progress
from spendwise.services.periods import today

logger = logging.getLogger(__name__)

router = APIRouter()


def goal_view(goal: SavingsGoal) -> dict:
    return {
        **dump(GoalOut, goal),
        **goal_progress(goal.current_amount, goal.target_amount, goal.target_date, today(), goal.is_completed),
    }


def _owned_goal(db: Session, user_id: str, goal_id: str) -> SavingsGoal:
    goal = db.query(SavingsGoal).filter(SavingsGoal.id == goal_id, SavingsGoal.user_id == user_id).first()
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("")
def list_goals(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    goals = db.query(SavingsGoal).options(joinedload(SavingsGoal.linked_account)).filter(
        SavingsGoal.user_id == user_id
    ).order_by(SavingsGoal.priority.asc(), SavingsGoal.created_at.desc()).all()
    return [goal_view(g) for g in goals]


@router.post("", status_code=201)
def create_goal(payload: GoalCreate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    if payload.linked_account_id:
        linked = db.query(Account.id).filter(
            Account.id == payload.linked_account_id,
            Account.user_id == user_id
        ).first()
        if not linked:
            raise HTTPException(status_code=404, detail="Account not found")

    goal = SavingsGoal(user_id=user_id, **payload.model_dump())
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal_view(goal)


@router.patch("/{goal_id}")
def update_goal(goal_id: str, payload: GoalUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    goal = _owned_goal(db, user_id, goal_id)
    for field, value in payload.changes().items():
        setattr(goal, field, value)
    db.commit()
    db.refresh(goal)
    return goal_view(goal)


@router.delete("/{goal_id}", status_code=204)
def delete_goal(goal_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    goal = _owned_goal(db, user_id, goal_id)
    db.delete(goal)
    db.commit()
    return Response(status_code=204)


@router.post("/{goal_id}/contribute")
def contribute(goal_id: str, payload: Contribution, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    if payload.amount is None or payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Valid amount is required")

    goal = _owned_goal(db, user_id, goal_id)
    is_completed = goal_service.contribute(db, goal, payload.amount, payload.note)
    db.commit()
    db.refresh(goal)

    return {
        "goal": goal_view(goal),
        "contribution": {"amount": payload.amount, "note": payload.note},
        "isCompleted": is_completed,
    }


@router.get("/{goal_id}/contributions")
def list_contributions(goal_id: str, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    goal = _owned_goal(db, user_id, goal_id)
    rows = db.query(GoalContribution).filter(
        GoalContribution.goal_id == goal.id
    ).order_by(GoalContribution.contributed_at.desc(), GoalContribution.id.desc()).all()
    return [dump(ContributionOut, c) for c in rows]
