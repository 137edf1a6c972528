from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from spendwise.core.security import get_current_user_id
from spendwise.db.session import get_db
from spendwise.models import NetWorthHistory
from spendwise.routers.deps import clamp
from spendwise.schemas.common import dump
from spendwise.schemas.networth import NetWorthOut
from spendwise.services.metrics import round_half_up
from spendwise.services.networth import networth_service
from spendwise.services.periods import today

router = APIRouter()

MAX_HISTORY_MONTHS = 60


@router.get("")
def history(months: int = Query(12), user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    months = clamp(months, 1, MAX_HISTORY_MONTHS)

    latest_first = db.query(NetWorthHistory).filter(
        NetWorthHistory.user_id == user_id
    ).order_by(NetWorthHistory.snapshot_date.desc()).limit(months).all()
    snapshots = [dump(NetWorthOut, row) for row in reversed(latest_first)]

    current = snapshots[-1] if snapshots else None
    previous = snapshots[-2] if len(snapshots) > 1 else None
    trend = current["net_worth"] - previous["net_worth"] if current and previous else 0
    if previous and previous["net_worth"] != 0:
        trend_percentage = round_half_up(trend / abs(previous["net_worth"]) * 100)
    else:
        trend_percentage = 0

    return {
        "history": snapshots,
        "current": current,
        "trend": trend,
        "trendPercentage": trend_percentage,
        "count": len(snapshots),
    }


@router.post("/snapshot")
def take_snapshot(response: Response, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    row, is_update = networth_service.take_snapshot(db, user_id, today())
    db.commit()
    db.refresh(row)

    response.status_code = 200 if is_update else 201
    return {"snapshot": dump(NetWorthOut, row), "isUpdate": is_update}


@router.get("/current")
def current(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return networth_service.current(db, user_id)
