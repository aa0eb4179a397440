from typing import Optional

from pydantic import Field

from .estimate import EstimateIn, EstimateOut, CamelModel
from .travel import TravelFeeOut


class QuoteIn(EstimateIn):
    distance_miles: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class QuoteOut(CamelModel):
    estimate: EstimateOut
    travel: Optional[TravelFeeOut] = None
    travel_total: float
    grand_total: float
    deposit_amount: float
    deposit_cents: int
    deposit_percentage: float
