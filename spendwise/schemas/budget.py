from datetime import date, datetime
from typing import Literal

from pydantic import Field

from spendwise.schemas.category import CategoryBrief
from spendwise.schemas.common import MAX_AMOUNT, PatchModel, RequestModel, RowModel

BudgetPeriod = Literal["weekly", "monthly", "yearly"]


class BudgetCreate(RequestModel):
    category_id: int = Field(gt=0)
    amount: float = Field(ge=1, le=MAX_AMOUNT)
    period: BudgetPeriod = "monthly"
    alert_threshold: float = Field(default=80, ge=0, le=100)


class BudgetUpdate(PatchModel):
    amount: float | None = Field(default=None, ge=1, le=MAX_AMOUNT)
    alert_threshold: float | None = Field(default=None, ge=0, le=100)


class BudgetOut(RowModel):
    id: str
    user_id: str
    category_id: int
    amount: float
    period: str
    spent: float
    start_date: date
    alert_threshold: float
    created_at: datetime | None = None

    category: CategoryBrief | None = None
