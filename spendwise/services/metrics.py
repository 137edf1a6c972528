"""
Read-time aggregation for the analytics, budget, goal and debt views.

Everything here is a pure function over plain rows (dicts or ORM objects
already loaded by a handler); nothing touches the database.
"""
import math
from datetime import date

import pandas as pd

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

UNCATEGORIZED = {"name": "Uncategorized", "color": "#6b7280", "icon": "📦"}

GRADE_THRESHOLDS = [(90, "A+"), (80, "A"), (70, "B"), (60, "C"), (50, "D")]

# Placeholder until account-mix scoring exists
DIVERSIFICATION_SCORE = 50


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side (0.5 -> 1, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


# ---------- Budgets / goals / debts ----------

def budget_status(spent: float, amount: float, alert_threshold: float) -> dict:
    used = (spent / amount) * 100 if amount else 0.0
    return {
        "percentUsed": round_half_up(used),
        "remaining": amount - spent,
        "isOverBudget": spent > amount,
        "isNearLimit": used >= alert_threshold,
    }


def goal_progress(current_amount: float, target_amount: float, target_date, today: date, is_completed: bool = False) -> dict:
    remaining = target_amount - current_amount
    estimated = None
    if target_date:
        days_remaining = (target_date - today).days
        daily_required = remaining / days_remaining if days_remaining > 0 else remaining
        estimated = {"daysRemaining": days_remaining, "dailyRequired": daily_required}

    return {
        "progress": round_half_up(current_amount / target_amount * 100) if target_amount else 0,
        "remaining": remaining,
        "estimatedCompletion": estimated,
        # Completion is one-way, a raised target does not undo it
        "isCompleted": is_completed or current_amount >= target_amount,
    }


def debt_status(amount: float, original_amount: float, due_date, is_settled: bool, today: date) -> dict:
    paid = original_amount - abs(amount)
    return {
        "isOverdue": bool(due_date and due_date < today and not is_settled),
        "paidPercentage": round_half_up(paid / original_amount * 100) if original_amount else 0,
    }


def debt_summary(debts: list, today: date) -> dict:
    active = [d for d in debts if not d.is_settled]
    they_owe_you = sum(d.amount for d in active if d.amount > 0)
    you_owe_them = sum(abs(d.amount) for d in active if d.amount < 0)
    overdue = [d for d in active if d.due_date and d.due_date < today]
    return {
        "theyOweYou": they_owe_you,
        "youOweThem": you_owe_them,
        "netBalance": they_owe_you - you_owe_them,
        "activeCount": len(active),
        "overdueCount": len(overdue),
    }


# ---------- Accounts ----------

def account_totals(accounts: list) -> dict:
    """Active accounts only; liabilities are summed by magnitude."""
    total_assets = sum(a.balance for a in accounts if a.is_asset)
    total_liabilities = sum(abs(a.balance) for a in accounts if not a.is_asset)
    return {
        "totalAssets": total_assets,
        "totalLiabilities": total_liabilities,
        "netWorth": total_assets - total_liabilities,
    }


def income_expense(transactions: list) -> tuple:
    income = sum(t.amount for t in transactions if t.type == "income")
    expense = sum(t.amount for t in transactions if t.type == "expense")
    return income, expense


# ---------- Health score ----------

def grade_for(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def budget_adherence(spent: float, amount: float) -> float:
    if spent <= amount:
        return 100.0
    return max(0.0, 100 - ((spent - amount) / amount) * 100)


def health_score(accounts: list, transactions: list, budgets: list) -> dict:
    totals = account_totals(accounts)
    total_assets = totals["totalAssets"]
    total_liabilities = totals["totalLiabilities"]

    total_income, total_expense = income_expense(transactions)
    savings_rate = ((total_income - total_expense) / total_income) * 100 if total_income > 0 else 0
    debt_ratio = (total_liabilities / total_assets) * 100 if total_assets > 0 else 0

    savings_score = min(100, max(0, savings_rate * 5))
    debt_score = min(100, max(0, 100 - debt_ratio))
    if budgets:
        budget_score = sum(budget_adherence(b.spent, b.amount) for b in budgets) / len(budgets)
    else:
        budget_score = 50
    diversification_score = DIVERSIFICATION_SCORE

    score = round_half_up(
        savings_score * 0.3
        + debt_score * 0.25
        + budget_score * 0.25
        + diversification_score * 0.2
    )

    tips = []
    if savings_rate < 10:
        tips.append("Try to save at least 10% of your income")
    if debt_ratio > 50:
        tips.append("Focus on paying down high-interest debt")
    if budget_score < 70:
        tips.append("Review your budget and reduce overspending categories")
    if not tips:
        tips.append("Great job! Keep maintaining your financial habits")

    return {
        "score": score,
        "grade": grade_for(score),
        "breakdown": {
            "savings": {"score": round_half_up(savings_score), "rate": round_half_up(savings_rate)},
            "debt": {"score": round_half_up(debt_score), "ratio": round_half_up(debt_ratio)},
            "budget": {"score": round_half_up(budget_score)},
            "diversification": {"score": diversification_score},
        },
        "summary": {
            "netWorth": totals["netWorth"],
            "totalAssets": total_assets,
            "totalLiabilities": total_liabilities,
            "monthlyIncome": round_half_up(total_income / 3),
            "monthlyExpense": round_half_up(total_expense / 3),
        },
        "tips": tips,
    }


# ---------- Spending patterns ----------

def spending_patterns(rows: list) -> dict:
    """
    rows: dicts with amount, txn_date, emotion and the category's
    name/color/icon (None when uncategorized). Expenses only.
    """
    if not rows:
        return {
            "byCategory": [],
            "byDayOfWeek": [{"day": day, "amount": 0.0} for day in DAY_NAMES],
            "byEmotion": [],
            "topSpendingDay": DAY_NAMES[0],
            "totalExpense": 0.0,
        }

    df = pd.DataFrame(rows)
    df["amount"] = df["amount"].astype(float)
    df["name"] = df["category_name"].fillna(UNCATEGORIZED["name"])
    df["color"] = df["category_color"].fillna(UNCATEGORIZED["color"])
    df["icon"] = df["category_icon"].fillna(UNCATEGORIZED["icon"])

    # 1. By category, biggest first
    by_category = (
        df.groupby("name", sort=False)
        .agg(color=("color", "first"), icon=("icon", "first"), total=("amount", "sum"), count=("amount", "size"))
        .reset_index()
        .sort_values("total", ascending=False, kind="stable")
    )
    total_expense = float(by_category["total"].sum())
    categories = [
        {
            "name": row["name"],
            "color": row["color"],
            "icon": row["icon"],
            "total": float(row["total"]),
            "count": int(row["count"]),
            "percentage": round_half_up(row["total"] / total_expense * 100) if total_expense > 0 else 0,
        }
        for row in by_category.to_dict("records")
    ]

    # 2. By day of week (pandas is Monday=0, we report Sunday first)
    weekday = pd.to_datetime(df["txn_date"]).dt.dayofweek
    sunday_first = (weekday + 1) % 7
    day_totals = df["amount"].groupby(sunday_first).sum().reindex(range(7), fill_value=0.0)
    by_day = [{"day": DAY_NAMES[i], "amount": float(day_totals[i])} for i in range(7)]
    top_index = int(day_totals.values.argmax())

    # 3. By emotion tag
    tagged = df[df["emotion"].notna() & (df["emotion"] != "")]
    emotions = []
    if not tagged.empty:
        by_emotion = tagged.groupby("emotion", sort=False)["amount"].agg(["sum", "count"]).reset_index()
        for row in by_emotion.to_dict("records"):
            emotions.append({
                "emotion": row["emotion"],
                "total": float(row["sum"]),
                "count": int(row["count"]),
                "avgPerTransaction": round_half_up(row["sum"] / row["count"]) if row["count"] else 0,
            })

    return {
        "byCategory": categories,
        "byDayOfWeek": by_day,
        "byEmotion": emotions,
        "topSpendingDay": DAY_NAMES[top_index],
        "totalExpense": total_expense,
    }


# ---------- Trends ----------

def monthly_trends(rows: list) -> dict:
    """rows: dicts with amount, type, txn_date. Months without activity are skipped."""
    summary = {"avgIncome": 0, "avgExpense": 0, "avgSavingsRate": 0}
    if not rows:
        return {"trends": [], "summary": summary}

    df = pd.DataFrame(rows)
    df["amount"] = df["amount"].astype(float)
    df["month"] = pd.to_datetime(df["txn_date"]).dt.strftime("%Y-%m")
    df["income"] = df["amount"].where(df["type"] == "income", 0.0)
    df["expense"] = df["amount"].where(df["type"] == "expense", 0.0)

    monthly = df.groupby("month", sort=True)[["income", "expense"]].sum()

    trends = []
    for month, row in monthly.iterrows():
        income = float(row["income"])
        expense = float(row["expense"])
        savings = income - expense
        trends.append({
            "month": month,
            "income": income,
            "expense": expense,
            "savings": savings,
            "savingsRate": round_half_up(savings / income * 100) if income > 0 else 0,
        })

    count = len(trends)
    summary["avgIncome"] = round_half_up(sum(t["income"] for t in trends) / count)
    summary["avgExpense"] = round_half_up(sum(t["expense"] for t in trends) / count)
    summary["avgSavingsRate"] = round_half_up(sum(t["savingsRate"] for t in trends) / count)
    return {"trends": trends, "summary": summary}


# ---------- Monthly summary ----------

def category_summary(rows: list) -> dict:
    """
    rows: dicts with amount, type and category name/color for one month.
    Transfers only move money between accounts, so they are left out.
    """
    flows = [r for r in rows if r["type"] in ("income", "expense")]
    if not flows:
        return {"totalIncome": 0.0, "totalExpense": 0.0, "balance": 0.0, "byCategory": []}

    df = pd.DataFrame(flows)
    df["amount"] = df["amount"].astype(float)
    df["name"] = df["category_name"].fillna(UNCATEGORIZED["name"])
    df["color"] = df["category_color"].fillna(UNCATEGORIZED["color"])
    df["total_income"] = df["amount"].where(df["type"] == "income", 0.0)
    df["total_expense"] = df["amount"].where(df["type"] == "expense", 0.0)

    grouped = (
        df.groupby("name", sort=False)
        .agg(color=("color", "first"), total_expense=("total_expense", "sum"), total_income=("total_income", "sum"))
        .reset_index()
        .sort_values("total_expense", ascending=False, kind="stable")
    )

    total_income = float(df["total_income"].sum())
    total_expense = float(df["total_expense"].sum())
    return {
        "totalIncome": total_income,
        "totalExpense": total_expense,
        "balance": total_income - total_expense,
        "byCategory": [
            {
                "name": row["name"],
                "color": row["color"],
                "total_expense": float(row["total_expense"]),
                "total_income": float(row["total_income"]),
            }
            for row in grouped.to_dict("records")
        ],
    }
