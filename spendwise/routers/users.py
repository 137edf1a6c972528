import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import (
    Account,
    Achievement,
    Budget,
    Category,
    Debt,
    DebtPayment,
    GoalContribution,
    NetWorthHistory,
    Profile,
    SavingsGoal,
    Transaction,
)
from spendwise.models.common import utcnow
from spendwise.schemas.account import AccountOut
from spendwise.schemas.budget import BudgetOut
from spendwise.schemas.category import CategoryOut
from spendwise.schemas.common import dump
from spendwise.schemas.debt import DebtOut, PaymentOut
from spendwise.schemas.goal import ContributionOut, GoalOut
from spendwise.schemas.networth import NetWorthOut
from spendwise.schemas.profile import ProfileOut, ProfileSync, ProfileUpdate, settings_view
from spendwise.schemas.transaction import TransactionOut
from spendwise.services.categories import create_default_categories
from spendwise.services.gamification import gamification_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _profile_or_404(db: Session, user_id: str) -> Profile:
    profile = db.query(Profile).filter(Profile.clerk_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/sync")
def sync_user(payload: ProfileSync, response: Response, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.clerk_id == user_id).first()

    if profile:
        profile.email = payload.email
        profile.full_name = payload.full_name
        profile.avatar_url = payload.avatar_url
        db.commit()
        db.refresh(profile)
        return {
            "isNewUser": False,
            "profile": dump(ProfileOut, profile),
            "needsOnboarding": not profile.onboarding_completed,
        }

    profile = Profile(
        clerk_id=user_id,
        email=payload.email,
        full_name=payload.full_name,
        avatar_url=payload.avatar_url,
    )
    db.add(profile)
    seeded = create_default_categories(db, user_id)
    gamification_service.get_or_create_stats(db, user_id)
    db.commit()
    db.refresh(profile)
    logger.info("New user %s synced (%s default categories)", user_id, seeded)

    response.status_code = 201
    return {
        "isNewUser": True,
        "profile": dump(ProfileOut, profile),
        "needsOnboarding": True,
    }


@router.get("/profile")
def get_profile(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return dump(ProfileOut, _profile_or_404(db, user_id))


@router.patch("/profile")
def update_profile(payload: ProfileUpdate, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    profile = _profile_or_404(db, user_id)
    for field, value in payload.changes().items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return dump(ProfileOut, profile)


@router.post("/complete-onboarding")
def complete_onboarding(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    profile = _profile_or_404(db, user_id)
    profile.onboarding_completed = True
    db.commit()
    db.refresh(profile)
    return dump(ProfileOut, profile)


@router.get("/settings")
def get_settings(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return settings_view(_profile_or_404(db, user_id))


@router.post("/export")
def export_data(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Everything the user owns, as one document."""
    profile = db.query(Profile).filter(Profile.clerk_id == user_id).first()

    goals = db.query(SavingsGoal).filter(SavingsGoal.user_id == user_id).order_by(SavingsGoal.created_at).all()
    goal_ids = [g.id for g in goals]
    contributions = db.query(GoalContribution).filter(
        GoalContribution.goal_id.in_(goal_ids)
    ).order_by(GoalContribution.contributed_at).all() if goal_ids else []

    debts = db.query(Debt).filter(Debt.user_id == user_id).order_by(Debt.created_at).all()
    debt_ids = [d.id for d in debts]
    payments = db.query(DebtPayment).filter(
        DebtPayment.debt_id.in_(debt_ids)
    ).order_by(DebtPayment.paid_at).all() if debt_ids else []

    stats = gamification_service.get_stats(db, user_id)
    achievements = db.query(Achievement).filter(Achievement.user_id == user_id).order_by(Achievement.earned_at).all()

    def owned(model, order):
        return db.query(model).filter(model.user_id == user_id).order_by(order).all()

    return {
        "exportedAt": utcnow().isoformat() + "Z",
        "profile": dump(ProfileOut, profile) if profile else None,
        "accounts": [dump(AccountOut, a) for a in owned(Account, Account.created_at)],
        "categories": [dump(CategoryOut, c) for c in owned(Category, Category.name)],
        "transactions": [dump(TransactionOut, t) for t in owned(Transaction, Transaction.txn_date)],
        "budgets": [dump(BudgetOut, b) for b in owned(Budget, Budget.created_at)],
        "goals": [dump(GoalOut, g) for g in goals],
        "goalContributions": [dump(ContributionOut, c) for c in contributions],
        "debts": [dump(DebtOut, d) for d in debts],
        "debtPayments": [dump(PaymentOut, p) for p in payments],
        "stats": gamification_service.stats_view(stats) if stats else None,
        "achievements": [{"badge_id": a.badge_id, "earned_at": a.earned_at} for a in achievements],
        "netWorthHistory": [dump(NetWorthOut, n) for n in owned(NetWorthHistory, NetWorthHistory.snapshot_date)],
    }
