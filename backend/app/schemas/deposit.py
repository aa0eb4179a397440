from typing import List, Optional

from pydantic import Field

from .estimate import CamelModel


class DepositCalculateIn(CamelModel):
    estimate_dollars: Optional[float] = Field(None, allow_inf_nan=False)
    estimate_cents: Optional[int] = None
    # Manual override, in dollars.
    deposit_dollars: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    show_table: bool = False


class DepositDetail(CamelModel):
    deposit: float
    percentage: float
    picked_by: str
    min_range: float
    max_range: float
    target: float


class DepositTableRow(CamelModel):
    estimate: float
    deposit: float
    percentage: float
    in_band: bool


class DepositCalculateOut(CamelModel):
    deposit: float
    deposit_cents: int
    percentage: Optional[float] = None
    picked_by: str
    is_manual_override: bool
    requested_estimate: Optional[float] = None
    calculation: Optional[DepositDetail] = None
    table: Optional[List[DepositTableRow]] = None
