from .estimate import (
    CamelModel,
    DepositSections,
    EstimateIn,
    EstimateOut,
    RatesOut,
    SpecialDatesOut,
)
from .deposit import DepositCalculateIn, DepositCalculateOut
from .travel import TravelFeeOut
from .quote import QuoteIn, QuoteOut
