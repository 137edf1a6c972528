"""Calendar helpers shared by the handlers and the mutation sequences."""
from datetime import date, datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

PERIOD_LENGTHS = {
    "weekly": relativedelta(weeks=1),
    "monthly": relativedelta(months=1),
    "yearly": relativedelta(years=1),
}


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def month_bounds(month: str) -> tuple:
    """'YYYY-MM' -> (first day, last day), both inclusive."""
    year, month_num = (int(part) for part in month.split("-"))
    start = date(year, month_num, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def current_month_bounds(today: date) -> tuple:
    return month_bounds(today.strftime("%Y-%m"))


def trailing_months_start(today: date, months: int) -> date:
    # First day of the month (months - 1) months back, so the current month counts as one
    return first_of_month(today) - relativedelta(months=months - 1)


def months_ago(day: date, months: int) -> date:
    return day - relativedelta(months=months)


def budget_start_date(period: str, today: date) -> date:
    if period == "weekly":
        return today - timedelta(days=today.weekday())
    if period == "yearly":
        return date(today.year, 1, 1)
    return first_of_month(today)


def budget_period_end(start: date, period: str) -> date:
    """Exclusive end of the budget window that opens on ``start``."""
    return start + PERIOD_LENGTHS.get(period, PERIOD_LENGTHS["monthly"])


def budget_covers(start: date, period: str, day: date) -> bool:
    return start <= day < budget_period_end(start, period)


def today() -> date:
    # Day boundaries follow UTC, like the stored timestamps
    return datetime.now(timezone.utc).date()
