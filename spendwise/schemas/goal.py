from datetime import date, datetime
from typing import ClassVar

from pydantic import Field

from spendwise.schemas.account import AccountBrief
from spendwise.schemas.common import HEX_COLOR, MAX_AMOUNT, PatchModel, RequestModel, RowModel


class GoalCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    target_amount: float = Field(ge=1, le=MAX_AMOUNT)
    target_date: date | None = None
    icon: str = Field(default="🎯", max_length=10)
    color: str = Field(default="#22c55e", pattern=HEX_COLOR)
    priority: int = Field(default=1, ge=1, le=10)
    linked_account_id: str | None = None


class GoalUpdate(PatchModel):
    nullable: ClassVar[tuple] = ("target_date",)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    target_amount: float | None = Field(default=None, ge=1, le=MAX_AMOUNT)
    target_date: date | None = None
    icon: str | None = Field(default=None, max_length=10)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    priority: int | None = Field(default=None, ge=1, le=10)


class Contribution(RequestModel):
    amount: float | None = Field(default=None, le=MAX_AMOUNT, allow_inf_nan=False)
    note: str | None = Field(default=None, max_length=500)


class GoalOut(RowModel):
    id: str
    user_id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: date | None = None
    icon: str | None = None
    color: str | None = None
    priority: int
    linked_account_id: str | None = None
    is_completed: bool
    completed_at: datetime | None = None
    created_at: datetime | None = None

    linked_account: AccountBrief | None = None


class ContributionOut(RowModel):
    id: int
    goal_id: str
    amount: float
    note: str | None = None
    contributed_at: datetime | None = None
