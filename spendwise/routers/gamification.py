from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.schemas.gamification import AwardXp
from spendwise.services.achievements import achievement_service
from spendwise.services.gamification import XP_VALUES, gamification_service
from spendwise.services.periods import today

router = APIRouter()


@router.get("/stats")
def get_stats(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    stats = gamification_service.get_or_create_stats(db, user_id)
    db.commit()
    db.refresh(stats)
    return gamification_service.stats_view(stats)


@router.get("/achievements")
def list_achievements(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return achievement_service.catalogue(db, user_id)


@router.post("/check-in")
def check_in(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    stats = gamification_service.get_stats(db, user_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="Stats not found")

    result = gamification_service.check_in(db, stats, today())
    db.commit()
    return result


@router.post("/award-xp")
def award_xp(payload: AwardXp, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    xp = payload.amount or XP_VALUES.get(payload.action, 0)
    if xp == 0:
        return {"xpAwarded": 0}

    result = gamification_service.award_xp(db, user_id, xp)
    if result is None:
        raise HTTPException(status_code=404, detail="Stats not found")
    db.commit()
    return result
