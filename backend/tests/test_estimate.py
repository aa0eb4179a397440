from datetime import date, datetime
from decimal import Decimal

import pytest

from app.service_types.event_staffing import (
    EstimateCalculator,
    InvalidInputError,
    InvalidSurgeMultiplierError,
    RuleKind,
    SpecialDateResolver,
    SpecialDateRule,
    SpecialDateSchedule,
    calculate_estimate,
)


def _calculator_with(surge=None, legacy=None):
    schedule = SpecialDateSchedule(surge_rules=surge or {}, legacy_rules=legacy or {})
    return EstimateCalculator(resolver=SpecialDateResolver(schedule))


def test_four_hour_event_bills_one_base_block():
    result = calculate_estimate(date(2025, 6, 15), 4.0, 2)
    assert result.base_subtotal == Decimal("550.00")
    assert result.extra_subtotal == Decimal("0.00")
    assert result.total_cost == Decimal("550.00")
    assert result.is_special_date is False
    assert result.special_label is None
    assert result.rate_type is None


def test_extra_hours_billed_per_helper():
    result = calculate_estimate(date(2025, 6, 15), 6.0, 2)
    assert result.extra_subtotal == Decimal("180.00")
    assert result.subtotal_before_adjustments == Decimal("730.00")
    assert result.total_cost == Decimal("730.00")


def test_fractional_extra_hours():
    result = calculate_estimate(date(2025, 6, 15), 5.5, 2)
    assert result.extra_subtotal == Decimal("135.00")
    assert result.total_cost == Decimal("685.00")


def test_christmas_day_doubles_the_total():
    result = calculate_estimate(date(2025, 12, 25), 4.0, 2)
    assert result.is_special_date is True
    assert result.special_label == "Christmas Day"
    assert result.rate_type == "holiday"
    assert result.special_multiplier == Decimal("2")
    assert result.subtotal_before_adjustments == Decimal("550.00")
    assert result.total_cost == Decimal("1100.00")


def test_new_years_day_is_holiday_not_surge():
    result = calculate_estimate(date(2027, 1, 1), 4.0, 1)
    assert result.rate_type == "holiday"
    assert result.special_label == "New Year's Day"
    assert result.total_cost == Decimal("650.00")


def test_surge_date_applies_one_and_a_half():
    result = calculate_estimate(date(2026, 5, 17), 4.0, 2)
    assert result.rate_type == "surge"
    assert result.special_multiplier == Decimal("1.5")
    assert result.total_cost == Decimal("900.00")


def test_legacy_date_used_when_nothing_else_matches():
    result = calculate_estimate(date(2025, 12, 15), 4.0, 2)
    assert result.rate_type == "legacy"
    assert result.special_label == "Special Date"
    assert result.total_cost == Decimal("1100.00")


def test_computed_thanksgiving_is_a_holiday():
    result = calculate_estimate(date(2029, 11, 22), 4.0, 1)
    assert result.special_label == "Thanksgiving"
    assert result.rate_type == "holiday"


@pytest.mark.parametrize(
    "event_date,expected_base",
    [
        (date(2024, 7, 1), Decimal("275")),
        (date(2026, 7, 1), Decimal("300")),
        (date(2030, 7, 1), Decimal("550")),
        (date(2035, 7, 1), Decimal("550")),
    ],
)
def test_rates_follow_event_year(event_date, expected_base):
    result = calculate_estimate(event_date, 4, 1)
    assert result.base_per_helper == expected_base
    assert result.total_cost == expected_base


def test_datetime_event_date_is_accepted():
    result = calculate_estimate(datetime(2025, 6, 15, 18, 30), 4, 1)
    assert result.date_key == "2025-06-15"


def test_total_is_non_decreasing_in_duration():
    durations = [Decimal(n) / 2 for n in range(1, 25)]
    totals = [calculate_estimate(date(2025, 12, 24), d, 3).total_cost for d in durations]
    assert totals == sorted(totals)


@pytest.mark.parametrize("duration", [0.25, 1, 2.5, 4])
def test_short_events_have_no_extra_hours(duration):
    result = calculate_estimate(date(2025, 6, 15), duration, 3)
    assert result.extra_subtotal == 0
    assert result.base_subtotal == Decimal("825.00")
    assert result.breakdown["extra_hours"] is None


@pytest.mark.parametrize(
    "args,field",
    [
        ((None, 4, 2), "event_date"),
        ((date.min, 4, 2), "event_date"),
        ((date(2025, 6, 15), 0, 2), "duration_hours"),
        ((date(2025, 6, 15), -1.5, 2), "duration_hours"),
        ((date(2025, 6, 15), "abc", 2), "duration_hours"),
        ((date(2025, 6, 15), 4, 0), "num_helpers"),
        ((date(2025, 6, 15), 4, -2), "num_helpers"),
        ((date(2025, 6, 15), 4, 2.5), "num_helpers"),
        ((date(2025, 6, 15), 4, True), "num_helpers"),
    ],
)
def test_invalid_input_rejected(args, field):
    with pytest.raises(InvalidInputError) as excinfo:
        calculate_estimate(*args)
    assert excinfo.value.field == field


@pytest.mark.parametrize("multiplier", ["1.2", "3.01", "0.5"])
def test_out_of_range_surge_multiplier_fails_at_estimate_time(multiplier):
    calc = _calculator_with(
        surge={"2025-06-15": SpecialDateRule(RuleKind.SURGE, "Bad surge", multiplier=Decimal(multiplier))}
    )
    with pytest.raises(InvalidSurgeMultiplierError):
        calc.calculate(date(2025, 6, 15), 4, 2)


def test_surge_multiplier_bounds_are_inclusive():
    calc = _calculator_with(
        surge={
            "2025-06-14": SpecialDateRule(RuleKind.SURGE, "Low", multiplier=Decimal("1.25")),
            "2025-06-15": SpecialDateRule(RuleKind.SURGE, "High", multiplier=Decimal("3.0")),
        }
    )
    assert calc.calculate(date(2025, 6, 14), 4, 2).total_cost == Decimal("687.50")
    assert calc.calculate(date(2025, 6, 15), 4, 2).total_cost == Decimal("1650.00")


def test_out_of_range_multiplier_on_legacy_rule_is_not_checked():
    calc = _calculator_with(
        legacy={"2025-06-15": SpecialDateRule(RuleKind.LEGACY, "Old", multiplier=Decimal("4"))}
    )
    assert calc.calculate(date(2025, 6, 15), 4, 1).total_cost == Decimal("1100.00")


def test_flat_increase_added_after_multiplier():
    calc = _calculator_with(
        legacy={
            "2025-06-14": SpecialDateRule(RuleKind.LEGACY, "Flat only", flat_increase=Decimal("100")),
            "2025-06-15": SpecialDateRule(
                RuleKind.LEGACY, "Both", multiplier=Decimal("2"), flat_increase=Decimal("50")
            ),
        }
    )
    assert calc.calculate(date(2025, 6, 14), 4, 2).total_cost == Decimal("650.00")
    both = calc.calculate(date(2025, 6, 15), 4, 2)
    assert both.total_cost == Decimal("1150.00")
    assert both.special_flat_increase == Decimal("50")
    assert both.breakdown["special_date_adjustment"] == "Both: ×2.00 + $50.00"


def test_total_rounds_half_up_to_cents():
    calc = _calculator_with(
        legacy={"2025-06-15": SpecialDateRule(RuleKind.LEGACY, "Odd", flat_increase=Decimal("0.005"))}
    )
    assert calc.calculate(date(2025, 6, 15), 4, 1).total_cost == Decimal("275.01")


def test_breakdown_and_summary_describe_line_items():
    result = calculate_estimate(date(2025, 12, 25), 6, 2)
    assert result.breakdown["base_block"] == "2 helpers × $275.00 (first 4 hours) = $550.00"
    assert result.breakdown["extra_hours"] == "2 helpers × 2.0 hours × $45.00/hour = $180.00"
    assert result.breakdown["subtotal"] == "$730.00"
    assert result.breakdown["special_date_adjustment"] == "Christmas Day: ×2.00"
    assert result.breakdown["total"] == "$1460.00"
    assert "Christmas Day" in result.summary
    assert result.summary.endswith("= $1460.00")


def test_estimate_is_reproducible():
    first = calculate_estimate(date(2025, 8, 19), 7.25, 4)
    second = calculate_estimate(date(2025, 8, 19), 7.25, 4)
    assert first == second


def test_very_long_duration_is_priced():
    result = calculate_estimate(date(2025, 6, 15), 1e30, 2)
    assert result.total_cost > Decimal("8.9E+31")
    assert result.total_cost.as_tuple().exponent == -2


@pytest.mark.parametrize("duration", [float("inf"), float("nan"), Decimal("Infinity")])
def test_non_finite_duration_rejected(duration):
    with pytest.raises(InvalidInputError) as excinfo:
        calculate_estimate(date(2025, 6, 15), duration, 2)
    assert excinfo.value.field == "duration_hours"
