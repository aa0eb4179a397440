"""Travel surcharge for events outside the home service radius.

Distances come from the caller (typically a Maps distance-matrix lookup done
elsewhere); this module only turns miles into dollars so it stays
deterministic and can run inside quote calculations without external calls.

Tiering, per helper:
* within 15 miles: free
* up to 10 miles beyond the radius: $40 flat
* each started 10-mile increment after that: +$10

Distances that are not finite numbers are treated as 0 miles; the HTTP layer
rejects them before they get here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING

from app.utils.currency import quantize, to_decimal

logger = logging.getLogger(__name__)

WITHIN_AREA_MESSAGE = "within our service area - no travel fee"


@dataclass(frozen=True)
class TravelFeePolicy:
    service_radius_miles: Decimal = Decimal("15.0")
    minimum_fee: Decimal = Decimal("40.0")
    included_miles_over: Decimal = Decimal("10.0")
    increment_miles: Decimal = Decimal("10.0")
    increment_fee: Decimal = Decimal("10.0")


DEFAULT_TRAVEL_POLICY = TravelFeePolicy()


@dataclass(frozen=True)
class TravelFeeResult:
    is_within_service_area: bool
    distance_miles: Decimal
    travel_fee_per_helper: Decimal
    total_travel_fee: Decimal
    num_helpers: int
    message: str


class TravelFeeCalculator:
    def __init__(self, policy: TravelFeePolicy = DEFAULT_TRAVEL_POLICY):
        self.policy = policy

    def fee_per_helper(self, distance_miles) -> Decimal:
        """Per-helper fee for a one-way driving distance; zero inside the radius."""
        distance = to_decimal(distance_miles)
        p = self.policy
        if distance <= p.service_radius_miles:
            return Decimal("0")
        miles_over = distance - p.service_radius_miles
        if miles_over <= p.included_miles_over:
            fee = p.minimum_fee
        else:
            increments = ((miles_over - p.included_miles_over) / p.increment_miles).to_integral_value(
                rounding=ROUND_CEILING
            )
            fee = p.minimum_fee + increments * p.increment_fee
        return quantize(fee, Decimal("1"))

    def calculate(self, distance_miles, num_helpers: int) -> TravelFeeResult:
        distance = to_decimal(distance_miles)
        display_distance = quantize(distance, Decimal("0.1"))
        fee = self.fee_per_helper(distance)
        within = distance <= self.policy.service_radius_miles

        if within:
            message = WITHIN_AREA_MESSAGE
            total = Decimal("0")
        else:
            total = fee * num_helpers
            if num_helpers == 1:
                message = (
                    f"Your event is {display_distance} miles away, outside of our area. "
                    f"A travel fee of ${total:.0f} applies."
                )
            else:
                message = (
                    f"Your event is {display_distance} miles away, outside of our area. "
                    f"A travel fee of ${fee:.0f} per helper applies (${total:.0f} for {num_helpers} helpers)."
                )

        logger.debug(
            "Travel fee computed",
            extra={"distance_miles": float(distance), "num_helpers": num_helpers, "total_travel_fee": float(total)},
        )
        return TravelFeeResult(
            is_within_service_area=within,
            distance_miles=display_distance,
            travel_fee_per_helper=fee,
            total_travel_fee=total,
            num_helpers=num_helpers,
            message=message,
        )


_default_calculator = TravelFeeCalculator()


def calculate_travel_fee(distance_miles, num_helpers: int) -> TravelFeeResult:
    return _default_calculator.calculate(distance_miles, num_helpers)
