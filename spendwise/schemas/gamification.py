from pydantic import Field

from spendwise.schemas.common import RequestModel


class AwardXp(RequestModel):
    action: str | None = Field(default=None, max_length=50)
    amount: int | None = Field(default=None, gt=0)
