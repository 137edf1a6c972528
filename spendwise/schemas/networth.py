from datetime import date, datetime

from spendwise.schemas.common import RowModel


class NetWorthOut(RowModel):
    id: int
    user_id: str
    snapshot_date: date
    total_assets: float
    total_liabilities: float
    net_worth: float
    cash_and_bank: float
    investments: float
    receivables: float
    credit_cards: float
    loans: float
    payables: float
    total_income: float
    total_expense: float
    savings_rate: float
    created_at: datetime | None = None
