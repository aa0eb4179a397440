from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from app.utils.currency import money, to_decimal

from .errors import InvalidInputError, InvalidSurgeMultiplierError
from .rates import DEFAULT_RATE_TABLE, RateTable
from .special_dates import (
    RuleKind,
    SpecialDateResolver,
    SpecialDateRule,
    is_valid_surge_multiplier,
    to_date_key,
)

logger = logging.getLogger(__name__)

BASE_BLOCK_HOURS = Decimal("4")


@dataclass(frozen=True)
class EstimateResult:
    year: int
    event_date: date
    date_key: str
    num_helpers: int
    duration_hours: Decimal
    base_per_helper: Decimal
    extra_per_hour_per_helper: Decimal
    base_subtotal: Decimal
    extra_subtotal: Decimal
    subtotal_before_adjustments: Decimal
    is_special_date: bool
    total_cost: Decimal
    currency: str
    special_label: Optional[str] = None
    rate_type: Optional[str] = None
    special_multiplier: Optional[Decimal] = None
    special_flat_increase: Optional[Decimal] = None
    breakdown: Dict[str, Optional[str]] = field(default_factory=dict)
    summary: str = ""


def _helpers_label(num_helpers: int) -> str:
    return f"{num_helpers} helper" if num_helpers == 1 else f"{num_helpers} helpers"


def _adjustment_text(rule: SpecialDateRule) -> str:
    parts = []
    if rule.multiplier is not None:
        parts.append(f"×{rule.multiplier:.2f}")
    if rule.flat_increase is not None:
        parts.append(f"+ ${rule.flat_increase:.2f}")
    return " ".join(parts)


def _coerce_event_date(event_date: Any) -> date:
    if isinstance(event_date, datetime):
        event_date = event_date.date()
    if not isinstance(event_date, date) or event_date == date.min:
        raise InvalidInputError("event_date", "eventDate is required")
    return event_date


def _coerce_duration(duration_hours: Any) -> Decimal:
    if isinstance(duration_hours, bool):
        raise InvalidInputError("duration_hours", "durationHours must be a positive number")
    duration = to_decimal(duration_hours, Decimal("NaN"))
    if not duration.is_finite() or duration <= 0:
        raise InvalidInputError("duration_hours", "durationHours must be a positive number")
    return duration


def _coerce_helpers(num_helpers: Any) -> int:
    if isinstance(num_helpers, bool) or not isinstance(num_helpers, int) or num_helpers <= 0:
        raise InvalidInputError("num_helpers", "numHelpers must be a positive integer")
    return num_helpers


class EstimateCalculator:
    """Event cost from the year's rates, the special-date rule and the crew size."""

    def __init__(
        self,
        rate_table: RateTable = DEFAULT_RATE_TABLE,
        resolver: Optional[SpecialDateResolver] = None,
        currency: str = "USD",
    ):
        self.rate_table = rate_table
        self.resolver = resolver or SpecialDateResolver()
        self.currency = currency

    def calculate(self, event_date: Any, duration_hours: Any, num_helpers: Any) -> EstimateResult:
        event_date = _coerce_event_date(event_date)
        duration = _coerce_duration(duration_hours)
        helpers = _coerce_helpers(num_helpers)

        year = event_date.year
        rates = self.rate_table.rates_for_year(year)

        # Any positive duration bills one full base block per helper.
        billed_base_block = Decimal("1") if duration > 0 else Decimal("0")
        extra_hours = max(duration - BASE_BLOCK_HOURS, Decimal("0"))

        base_subtotal = rates.base_per_helper * helpers * billed_base_block
        extra_subtotal = rates.extra_per_hour_per_helper * helpers * extra_hours
        subtotal_before = base_subtotal + extra_subtotal

        date_key = to_date_key(event_date)
        resolution = self.resolver.resolve(date_key, year)
        rule = resolution.rule

        subtotal = subtotal_before
        if rule is not None:
            if rule.multiplier is not None:
                if rule.kind is RuleKind.SURGE and not is_valid_surge_multiplier(rule.multiplier):
                    raise InvalidSurgeMultiplierError(date_key, rule.multiplier)
                subtotal *= rule.multiplier
            if rule.flat_increase is not None:
                subtotal += rule.flat_increase

        total_cost = money(subtotal)

        breakdown: Dict[str, Optional[str]] = {
            "base_block": (
                f"{_helpers_label(helpers)} × ${rates.base_per_helper:.2f} (first 4 hours) = ${base_subtotal:.2f}"
            ),
            "extra_hours": None,
            "subtotal": f"${subtotal_before:.2f}",
            "special_date_adjustment": None,
            "total": f"${total_cost:.2f}",
        }
        if extra_hours > 0:
            breakdown["extra_hours"] = (
                f"{_helpers_label(helpers)} × {extra_hours:.1f} hours × "
                f"${rates.extra_per_hour_per_helper:.2f}/hour = ${extra_subtotal:.2f}"
            )

        summary = (
            f"{_helpers_label(helpers)}, {duration:.1f} hours, {year} rates "
            f"(${rates.base_per_helper:.2f} base + ${rates.extra_per_hour_per_helper:.2f}/hour extra)"
        )
        if rule is not None:
            adjustment = _adjustment_text(rule)
            breakdown["special_date_adjustment"] = f"{rule.label}: {adjustment}"
            summary += f", {rule.label} ({rule.kind.value} {adjustment}) = ${total_cost:.2f}"
        else:
            summary += f" = ${total_cost:.2f}"

        logger.debug(
            "Estimate computed",
            extra={
                "date_key": date_key,
                "num_helpers": helpers,
                "duration_hours": float(duration),
                "rate_type": rule.kind.value if rule else None,
                "total_cost": float(total_cost),
            },
        )

        return EstimateResult(
            year=year,
            event_date=event_date,
            date_key=date_key,
            num_helpers=helpers,
            duration_hours=duration,
            base_per_helper=rates.base_per_helper,
            extra_per_hour_per_helper=rates.extra_per_hour_per_helper,
            base_subtotal=money(base_subtotal),
            extra_subtotal=money(extra_subtotal),
            subtotal_before_adjustments=money(subtotal_before),
            is_special_date=resolution.is_special,
            special_label=rule.label if rule else None,
            rate_type=rule.kind.value if rule else None,
            special_multiplier=rule.multiplier if rule else None,
            special_flat_increase=rule.flat_increase if rule else None,
            total_cost=total_cost,
            currency=self.currency,
            breakdown=breakdown,
            summary=summary,
        )


_default_calculator = EstimateCalculator()


def calculate_estimate(event_date: Any, duration_hours: Any, num_helpers: Any) -> EstimateResult:
    """Estimate with the compiled rate and special-date tables."""
    return _default_calculator.calculate(event_date, duration_hours, num_helpers)
