import logging
from datetime import date, timedelta

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from spendwise.models import UserStats
from spendwise.services.achievements import achievement_service, badge_details
from spendwise.services.metrics import round_half_up

logger = logging.getLogger(__name__)

# XP needed to reach level N+1 is LEVEL_XP[N]
LEVEL_XP = [0, 100, 300, 600, 1000, 1500, 2100, 2800, 3600, 4500, 5500]
LEVEL_TITLES = ["Beginner", "Tracker", "Saver", "Budgeter", "Analyst", "Strategist",
                "Expert", "Master", "Guru", "Legend", "Mythic"]

CHECK_IN_XP = 20
TRANSACTION_XP = 5
TRANSACTION_WITH_EMOTION_XP = 10

XP_VALUES = {
    "add_transaction": TRANSACTION_XP,
    "add_transaction_with_emotion": TRANSACTION_WITH_EMOTION_XP,
    "upload_receipt": 15,
    "use_voice_input": 10,
    "complete_goal": 100,
    "stay_under_budget": 50,
}

STREAK_BADGES = [(7, "on_fire"), (30, "diamond_hands")]
TRANSACTION_BADGES = [(1, "first_steps"), (100, "century_club")]


def level_for_xp(xp: int, level: int = 1) -> int:
    """Walk the threshold table upward from ``level``."""
    while level < len(LEVEL_XP) and xp >= LEVEL_XP[level]:
        level += 1
    return level


def level_progress(level: int, xp: int) -> dict:
    floor = LEVEL_XP[level - 1] if 0 < level <= len(LEVEL_XP) else 0
    ceiling = LEVEL_XP[level] if level < len(LEVEL_XP) else LEVEL_XP[-1]
    progress = xp - floor
    needed = ceiling - floor
    return {
        "title": LEVEL_TITLES[level - 1] if 0 < level <= len(LEVEL_TITLES) else "Legend",
        "xpProgress": progress,
        "xpNeeded": needed,
        # At the top level there is nothing left to fill
        "progressPercent": round_half_up(progress / needed * 100) if needed > 0 else 100,
    }


def next_streak(last_active, streak: int, today: date) -> int:
    if last_active == today - timedelta(days=1):
        return streak + 1
    return 1


def transaction_xp(has_emotion: bool) -> int:
    return TRANSACTION_WITH_EMOTION_XP if has_emotion else TRANSACTION_XP


class GamificationService:
    def get_stats(self, db: Session, user_id: str):
        return db.query(UserStats).filter(UserStats.user_id == user_id).first()

    def get_or_create_stats(self, db: Session, user_id: str) -> UserStats:
        stats = self.get_stats(db, user_id)
        if stats is None:
            stats = UserStats(user_id=user_id)
            db.add(stats)
            db.flush()
            db.refresh(stats)
        return stats

    def stats_view(self, stats: UserStats) -> dict:
        return {
            "level": stats.level,
            "xp": stats.xp,
            **level_progress(stats.level, stats.xp),
            "streak": stats.streak,
            "longestStreak": stats.longest_streak,
            "totalTransactions": stats.total_transactions,
            "financialScore": stats.financial_score,
            "lastActive": stats.last_active,
        }

    def _sync_level(self, db: Session, stats: UserStats) -> None:
        db.refresh(stats)
        level = level_for_xp(stats.xp)
        if level != stats.level:
            stats.level = level
            db.flush()

    def record_transaction(self, db: Session, user_id: str, amount: float, has_emotion: bool) -> list:
        """Stats side effect of a new transaction. Returns badges newly earned."""
        stats = self.get_or_create_stats(db, user_id)
        db.execute(
            update(UserStats)
            .where(UserStats.user_id == user_id)
            .values(
                xp=UserStats.xp + transaction_xp(has_emotion),
                total_transactions=UserStats.total_transactions + 1,
            )
            .execution_options(synchronize_session=False)
        )
        self._sync_level(db, stats)
        logger.debug("Stats updated for %s after transaction of %s", user_id, amount)

        earned = []
        for threshold, badge_id in TRANSACTION_BADGES:
            if stats.total_transactions >= threshold and achievement_service.grant(db, user_id, badge_id):
                earned.append(badge_id)
        return earned

    def reverse_transaction(self, db: Session, user_id: str, has_emotion: bool) -> None:
        stats = self.get_stats(db, user_id)
        if stats is None:
            return
        xp = transaction_xp(has_emotion)
        db.execute(
            update(UserStats)
            .where(UserStats.user_id == user_id)
            .values(
                xp=case((UserStats.xp > xp, UserStats.xp - xp), else_=0),
                total_transactions=case(
                    (UserStats.total_transactions > 0, UserStats.total_transactions - 1), else_=0
                ),
            )
            .execution_options(synchronize_session=False)
        )
        self._sync_level(db, stats)

    def award_xp(self, db: Session, user_id: str, xp: int):
        stats = self.get_stats(db, user_id)
        if stats is None:
            return None
        previous_level = stats.level
        db.execute(
            update(UserStats)
            .where(UserStats.user_id == user_id)
            .values(xp=UserStats.xp + xp)
            .execution_options(synchronize_session=False)
        )
        self._sync_level(db, stats)
        return {
            "xpAwarded": xp,
            "newXP": stats.xp,
            "levelUp": stats.level > previous_level,
            "newLevel": stats.level,
        }

    def check_in(self, db: Session, stats: UserStats, today: date) -> dict:
        if stats.last_active == today:
            return {"message": "Already checked in today", "streak": stats.streak, "xpAwarded": 0}

        previous_level = stats.level
        streak = next_streak(stats.last_active, stats.streak, today)
        new_xp = stats.xp + CHECK_IN_XP
        new_level = level_for_xp(new_xp, stats.level)

        stats.streak = streak
        stats.longest_streak = max(stats.longest_streak, streak)
        stats.last_active = today
        stats.xp = new_xp
        stats.level = new_level
        db.flush()

        new_achievements = []
        for threshold, badge_id in STREAK_BADGES:
            if streak >= threshold and achievement_service.grant(db, stats.user_id, badge_id):
                new_achievements.append(badge_details(badge_id))

        return {
            "message": "Check-in successful!",
            "streak": streak,
            "xpAwarded": CHECK_IN_XP,
            "newXP": new_xp,
            "levelUp": new_level > previous_level,
            "newLevel": new_level,
            "newAchievements": new_achievements,
        }


gamification_service = GamificationService()
