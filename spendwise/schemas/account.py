from datetime import datetime
from typing import ClassVar, Literal

from pydantic import Field

from spendwise.schemas.common import HEX_COLOR, PatchModel, RequestModel, RowModel

AccountType = Literal["cash", "bank", "e-wallet", "investment", "credit_card", "loan"]


class AccountCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    type: AccountType
    icon: str = Field(default="💳", max_length=10)
    color: str = Field(default="#3b82f6", pattern=HEX_COLOR)
    initial_balance: float = 0.0
    is_asset: bool = True
    institution: str | None = Field(default=None, max_length=100)
    account_number: str | None = Field(default=None, max_length=50)


class AccountUpdate(PatchModel):
    nullable: ClassVar[tuple] = ("institution", "account_number")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    icon: str | None = Field(default=None, max_length=10)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    institution: str | None = Field(default=None, max_length=100)
    account_number: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None


class BalanceAdjustment(RequestModel):
    new_balance: float
    reason: str | None = Field(default=None, max_length=500)


class AccountBrief(RowModel):
    id: str
    name: str
    icon: str | None = None
    color: str | None = None


class AccountOut(RowModel):
    id: str
    user_id: str
    name: str
    type: str
    icon: str | None = None
    color: str | None = None
    balance: float
    initial_balance: float
    is_asset: bool
    is_active: bool
    institution: str | None = None
    account_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
