from datetime import date, datetime
from typing import ClassVar, Literal

from pydantic import Field, model_validator

from spendwise.schemas.account import AccountBrief
from spendwise.schemas.category import CategoryBrief
from spendwise.schemas.common import MAX_AMOUNT, PatchModel, RequestModel, RowModel

TransactionType = Literal["income", "expense", "transfer"]


class TransactionCreate(RequestModel):
    account_id: str = Field(min_length=1)
    to_account_id: str | None = None
    category_id: int | None = Field(default=None, gt=0)
    amount: float = Field(ge=0.01, le=MAX_AMOUNT)
    type: TransactionType
    description: str = Field(default="", max_length=500)
    txn_date: date
    emotion: str | None = Field(default=None, max_length=10)
    tags: list[str] | None = None

    @model_validator(mode="after")
    def check_transfer(self):
        if self.type == "transfer":
            if not self.to_account_id:
                raise ValueError("Destination account is required for transfers")
            if self.to_account_id == self.account_id:
                raise ValueError("Destination account must differ from source account")
        return self


class TransactionUpdate(PatchModel):
    nullable: ClassVar[tuple] = ("category_id", "emotion", "tags")

    category_id: int | None = Field(default=None, gt=0)
    amount: float | None = Field(default=None, ge=0.01, le=MAX_AMOUNT)
    description: str | None = Field(default=None, max_length=500)
    txn_date: date | None = None
    emotion: str | None = Field(default=None, max_length=10)
    tags: list[str] | None = None


class TransactionOut(RowModel):
    id: str
    user_id: str
    account_id: str
    to_account_id: str | None = None
    category_id: int | None = None
    amount: float
    type: str
    description: str | None = None
    txn_date: date
    emotion: str | None = None
    tags: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    account: AccountBrief | None = None
    to_account: AccountBrief | None = None
    category: CategoryBrief | None = None
