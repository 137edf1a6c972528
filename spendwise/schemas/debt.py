from datetime import date, datetime

from pydantic import Field, field_validator

from spendwise.schemas.common import MAX_AMOUNT, RequestModel, RowModel


class DebtCreate(RequestModel):
    person_name: str = Field(min_length=1, max_length=100)
    person_contact: str | None = Field(default=None, max_length=200)
    # Positive = they owe you, negative = you owe them
    amount: float = Field(ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)
    description: str | None = Field(default=None, max_length=500)
    due_date: date | None = None
    reminder_enabled: bool = True

    @field_validator("amount")
    @classmethod
    def not_zero(cls, value):
        if value == 0:
            raise ValueError("Amount cannot be zero")
        return value


class Payment(RequestModel):
    amount: float | None = Field(default=None, le=MAX_AMOUNT, allow_inf_nan=False)
    note: str | None = Field(default=None, max_length=500)


class DebtOut(RowModel):
    id: str
    user_id: str
    person_name: str
    person_contact: str | None = None
    amount: float
    original_amount: float
    description: str | None = None
    due_date: date | None = None
    is_settled: bool
    settled_at: datetime | None = None
    reminder_enabled: bool
    created_at: datetime | None = None


class PaymentOut(RowModel):
    id: int
    debt_id: str
    amount: float
    note: str | None = None
    paid_at: datetime | None = None
