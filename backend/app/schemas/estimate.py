from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON in and out is camelCase; snake_case names are accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EstimateIn(CamelModel):
    event_date: date
    # Positivity is enforced by the estimate engine so its error wording is used.
    duration_hours: float = Field(allow_inf_nan=False)
    num_helpers: int


class DepositRecommendation(CamelModel):
    amount_cents: int
    amount: float
    percentage: float
    picked_by: str
    is_manual_override: bool = False
    estimate_source: str = "provided"


class DepositRange(CamelModel):
    min_percent: float
    max_percent: float
    min_amount_cents: int
    max_amount_cents: int
    min_amount: float
    max_amount: float
    description: str


class DepositCalculationDetail(CamelModel):
    estimate_cents: int
    target_amount_cents: int
    target_amount: float
    floored_target_cents: int
    floored_target_amount: float
    summary: str


class DepositSections(CamelModel):
    recommended: DepositRecommendation
    range: DepositRange
    calculation: DepositCalculationDetail


class EstimateOut(CamelModel):
    year: int
    event_date: date
    date_key: str
    num_helpers: int
    duration_hours: float
    base_per_helper: float
    extra_per_hour_per_helper: float
    base_subtotal: float
    extra_subtotal: float
    subtotal_before_adjustments: float
    is_special_date: bool
    special_label: Optional[str] = None
    rate_type: Optional[str] = None
    special_multiplier: Optional[float] = None
    special_flat_increase: Optional[float] = None
    total_cost: float
    currency: str
    breakdown: Dict[str, Optional[str]]
    summary: str
    deposit: Optional[DepositSections] = None


class SpecialDate(CamelModel):
    date: str
    multiplier: Optional[float] = None
    flat_increase: Optional[float] = None
    label: str
    type: str


class YearSpecialDates(CamelModel):
    holidays: List[SpecialDate] = Field(default_factory=list)
    surge_dates: List[SpecialDate] = Field(default_factory=list)
    legacy_dates: List[SpecialDate] = Field(default_factory=list)
    all_dates: List[SpecialDate] = Field(default_factory=list)


class SpecialDatesOut(CamelModel):
    years_ahead: int
    start_year: int
    data: Dict[int, YearSpecialDates]


class RateRow(CamelModel):
    year: int
    base_per_helper: float
    extra_per_hour_per_helper: float


class RatesOut(CamelModel):
    currency: str
    base_block_hours: float
    rates: List[RateRow]
