from datetime import date
import logging

from fastapi import APIRouter, Query

from ..core.config import settings
from ..schemas.estimate import EstimateIn, EstimateOut, RatesOut, SpecialDatesOut
from ..schemas.quote import QuoteIn, QuoteOut
from ..service_types.event_staffing import (
    EstimateCalculator,
    EstimateResult,
    PricingError,
    SpecialDateResolver,
)
from ..service_types.event_staffing.estimate import BASE_BLOCK_HOURS
from ..services import booking_quote
from ..services.deposit_calculator import DepositCalculator
from ..utils.currency import dollars_to_cents
from ..utils.errors import pricing_error_response
from ..utils.metrics import incr
from .api_travel import travel_payload

router = APIRouter(tags=["estimates"])
logger = logging.getLogger(__name__)

resolver = SpecialDateResolver()
calculator = EstimateCalculator(resolver=resolver, currency=settings.DEFAULT_CURRENCY)
deposits = DepositCalculator()

MIN_YEARS_AHEAD, MAX_YEARS_AHEAD = 1, 20
MIN_START_YEAR, MAX_START_YEAR = 2020, 2100


def _optional_float(value):
    return float(value) if value is not None else None


def estimate_payload(result: EstimateResult) -> dict:
    """Flatten an estimate into JSON-friendly floats and attach the deposit blocks."""
    calc = deposits.calculate_from_estimate(dollars_to_cents(result.total_cost))
    return {
        "year": result.year,
        "event_date": result.event_date,
        "date_key": result.date_key,
        "num_helpers": result.num_helpers,
        "duration_hours": float(result.duration_hours),
        "base_per_helper": float(result.base_per_helper),
        "extra_per_hour_per_helper": float(result.extra_per_hour_per_helper),
        "base_subtotal": float(result.base_subtotal),
        "extra_subtotal": float(result.extra_subtotal),
        "subtotal_before_adjustments": float(result.subtotal_before_adjustments),
        "is_special_date": result.is_special_date,
        "special_label": result.special_label,
        "rate_type": result.rate_type,
        "special_multiplier": _optional_float(result.special_multiplier),
        "special_flat_increase": _optional_float(result.special_flat_increase),
        "total_cost": float(result.total_cost),
        "currency": result.currency,
        "breakdown": result.breakdown,
        "summary": result.summary,
        "deposit": deposits.deposit_sections(calc),
    }


@router.post("/estimate", response_model=EstimateOut)
def create_estimate(body: EstimateIn):
    """Price an event and recommend a booking deposit."""
    try:
        result = calculator.calculate(body.event_date, body.duration_hours, body.num_helpers)
    except PricingError as exc:
        logger.warning("Estimate rejected for %s: %s", body.event_date, exc)
        raise pricing_error_response(exc)
    incr("estimate.calculated", tags={"rate_type": result.rate_type or "standard"})
    return estimate_payload(result)


@router.post("/quote", response_model=QuoteOut)
def create_quote(body: QuoteIn):
    """Estimate plus travel fee for a venue ``distanceMiles`` away."""
    try:
        quote = booking_quote.calculate_quote_breakdown(
            body.event_date,
            body.duration_hours,
            body.num_helpers,
            distance_miles=body.distance_miles,
            calculator=calculator,
        )
    except PricingError as exc:
        logger.warning("Quote rejected for %s: %s", body.event_date, exc)
        raise pricing_error_response(exc)
    travel = quote["travel"]
    incr("quote.calculated", tags={"travel": travel is not None and not travel.is_within_service_area})
    return {
        "estimate": estimate_payload(quote["estimate"]),
        "travel": travel_payload(travel) if travel is not None else None,
        "travel_total": float(quote["travel_total"]),
        "grand_total": float(quote["grand_total"]),
        "deposit_amount": quote["deposit_amount"],
        "deposit_cents": quote["deposit"].value,
        "deposit_percentage": quote["deposit"].percentage,
    }


@router.get("/estimate/special-dates", response_model=SpecialDatesOut)
def list_special_dates(
    years: int | None = Query(None),
    start_year: int | None = Query(None, alias="startYear"),
):
    """Holiday, surge and legacy dates for the coming years.

    Out-of-range ``years`` or ``startYear`` values fall back to the defaults.
    """
    years_ahead = settings.SPECIAL_DATES_DEFAULT_YEARS
    if years is not None and MIN_YEARS_AHEAD <= years <= MAX_YEARS_AHEAD:
        years_ahead = years
    first_year = date.today().year
    if start_year is not None and MIN_START_YEAR <= start_year <= MAX_START_YEAR:
        first_year = start_year
    return {
        "years_ahead": years_ahead,
        "start_year": first_year,
        "data": resolver.special_dates_for_years(years_ahead, first_year),
    }


@router.get("/estimate/rates", response_model=RatesOut)
def list_rates():
    """Compiled per-year helper rates."""
    return {
        "currency": settings.DEFAULT_CURRENCY,
        "base_block_hours": float(BASE_BLOCK_HOURS),
        "rates": calculator.rate_table.as_rows(),
    }
