import logging

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from spendwise.models import Achievement
from spendwise.models.common import utcnow
from spendwise.services.metrics import round_half_up

logger = logging.getLogger(__name__)

BADGES = {
    "first_steps": {"name": "First Steps", "icon": "🌱", "description": "Track your first transaction"},
    "on_fire": {"name": "On Fire", "icon": "🔥", "description": "7-day tracking streak"},
    "diamond_hands": {"name": "Diamond Hands", "icon": "💎", "description": "30-day tracking streak"},
    "goal_getter": {"name": "Goal Getter", "icon": "🎯", "description": "Complete a savings goal"},
    "analyst": {"name": "Analyst", "icon": "📊", "description": "View analytics 10 times"},
    "budget_master": {"name": "Budget Master", "icon": "💰", "description": "Stay under budget for 3 months"},
    "debt_free": {"name": "Debt Free", "icon": "🏆", "description": "Settle all debts"},
    "receipt_collector": {"name": "Receipt Collector", "icon": "📸", "description": "Upload 50 receipts"},
    "voice_commander": {"name": "Voice Commander", "icon": "🗣️", "description": "Use voice input 20 times"},
    "mindful_spender": {"name": "Mindful Spender", "icon": "🧘", "description": "Tag emotions for 7 days"},
    "century_club": {"name": "Century Club", "icon": "💯", "description": "Track 100 transactions"},
    "big_saver": {"name": "Big Saver", "icon": "🤑", "description": "Save 1 million"},
    "consistent": {"name": "Consistent", "icon": "📅", "description": "Track every day for a month"},
}


def badge_details(badge_id: str) -> dict:
    return {"id": badge_id, **BADGES[badge_id]}


class AchievementService:
    def grant(self, db: Session, user_id: str, badge_id: str) -> bool:
        """
        Insert-or-ignore on (user_id, badge_id).
        Returns True only when the badge was newly earned.
        """
        dialect = db.get_bind().dialect.name
        values = {"user_id": user_id, "badge_id": badge_id, "earned_at": utcnow()}

        if dialect in ("postgresql", "sqlite"):
            insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = insert(Achievement).values(**values).on_conflict_do_nothing(
                index_elements=["user_id", "badge_id"]
            )
            granted = db.execute(stmt).rowcount == 1
        else:
            exists = db.query(Achievement.id).filter(
                Achievement.user_id == user_id,
                Achievement.badge_id == badge_id
            ).first()
            granted = exists is None
            if granted:
                db.add(Achievement(**values))
                db.flush()

        if granted:
            logger.info("Achievement %s granted to %s", badge_id, user_id)
        return granted

    def catalogue(self, db: Session, user_id: str) -> dict:
        earned = {
            row.badge_id: row.earned_at
            for row in db.query(Achievement).filter(Achievement.user_id == user_id).all()
        }
        achievements = [
            {**badge_details(badge_id), "earned": badge_id in earned, "earnedAt": earned.get(badge_id)}
            for badge_id in BADGES
        ]
        earned_count = len([badge_id for badge_id in earned if badge_id in BADGES])
        return {
            "achievements": achievements,
            "earnedCount": earned_count,
            "totalCount": len(BADGES),
            "completionPercent": round_half_up(earned_count / len(BADGES) * 100),
        }


achievement_service = AchievementService()
