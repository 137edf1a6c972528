from fastapi import HTTPException

from spendwise.services.periods import month_bounds


def month_window(month: str) -> tuple:
    """Inclusive (first, last) day of a 'YYYY-MM' query value."""
    try:
        return month_bounds(month)
    except ValueError:
        raise HTTPException(status_code=400, detail="month: Invalid month")


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))
