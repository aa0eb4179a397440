"""Quote facade combining the event estimate, travel fee and deposit.

The travel fee is added on top of the event total; the deposit is still
derived from the event total alone, matching what goes into the quote email.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from app.service_types.event_staffing import EstimateCalculator, calculate_estimate
from app.services.deposit_calculator import calculate_deposit_from_estimate
from app.services.travel_fee import calculate_travel_fee
from app.utils.currency import cents_to_dollars, dollars_to_cents, money


def calculate_quote_breakdown(
    event_date: Any,
    duration_hours: Any,
    num_helpers: int,
    distance_miles: Optional[float] = None,
    calculator: Optional[EstimateCalculator] = None,
) -> dict:
    """Return estimate, travel fee, grand total and recommended deposit.

    ``calculator`` prices the event; the compiled defaults are used when omitted.
    """
    if calculator is not None:
        estimate = calculator.calculate(event_date, duration_hours, num_helpers)
    else:
        estimate = calculate_estimate(event_date, duration_hours, num_helpers)

    travel = None
    travel_total = Decimal("0")
    if distance_miles is not None:
        travel = calculate_travel_fee(distance_miles, estimate.num_helpers)
        travel_total = travel.total_travel_fee

    deposit = calculate_deposit_from_estimate(dollars_to_cents(estimate.total_cost))

    return {
        "estimate": estimate,
        "travel": travel,
        "travel_total": money(travel_total),
        "grand_total": money(estimate.total_cost + travel_total),
        "deposit": deposit,
        "deposit_amount": cents_to_dollars(deposit.value),
    }
