"""Special-date pricing rules.

A calendar date can carry one price adjustment: a computed holiday, an
enumerated surge date, or a one-off legacy date kept for older quotes.
Resolution walks :data:`RULE_PRECEDENCE` and stops at the first match, so
Jan 1 resolves as New Year's Day even though it is also in the surge table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .errors import InvalidSurgeMultiplierError

logger = logging.getLogger(__name__)

SURGE_MULTIPLIER_MIN = Decimal("1.25")
SURGE_MULTIPLIER_MAX = Decimal("3.0")
HOLIDAY_MULTIPLIER = Decimal("2")
SURGE_MULTIPLIER = Decimal("1.5")


class RuleKind(str, Enum):
    HOLIDAY = "holiday"
    SURGE = "surge"
    LEGACY = "legacy"


RULE_PRECEDENCE = (RuleKind.HOLIDAY, RuleKind.SURGE, RuleKind.LEGACY)


@dataclass(frozen=True)
class SpecialDateRule:
    kind: RuleKind
    label: str
    multiplier: Optional[Decimal] = None
    flat_increase: Optional[Decimal] = None


@dataclass(frozen=True)
class SpecialDateResolution:
    date_key: str
    is_special: bool
    rule: Optional[SpecialDateRule] = None


def to_date_key(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def thanksgiving_day(year: int) -> int:
    """Day of month of the 4th Thursday of November.

    ``1 + ((4 - weekday(Nov 1) + 7) % 7) + 21`` with Sunday = 0 ... Saturday = 6,
    i.e. the first Thursday on or after Nov 1 plus three weeks.
    """
    nov1_weekday = date(year, 11, 1).isoweekday() % 7
    return 1 + ((4 - nov1_weekday + 7) % 7) + 21


def holiday_rules_for_year(year: int, multiplier: Decimal = HOLIDAY_MULTIPLIER) -> Dict[str, SpecialDateRule]:
    def rule(label: str) -> SpecialDateRule:
        return SpecialDateRule(kind=RuleKind.HOLIDAY, label=label, multiplier=multiplier)

    return {
        f"{year}-01-01": rule("New Year's Day"),
        f"{year}-11-{thanksgiving_day(year):02d}": rule("Thanksgiving"),
        f"{year}-12-24": rule("Christmas Eve"),
        f"{year}-12-25": rule("Christmas Day"),
        f"{year}-12-31": rule("New Year's Eve"),
    }


# (month, day) pairs that book out every year.
_SURGE_MONTH_DAYS = ((1, 1), (2, 5), (5, 17), (8, 19), (12, 27))
_SURGE_YEARS = range(2025, 2031)

DEFAULT_SURGE_RULES: Mapping[str, SpecialDateRule] = MappingProxyType(
    {
        f"{year}-{month:02d}-{day:02d}": SpecialDateRule(
            kind=RuleKind.SURGE, label="High-Demand Date", multiplier=SURGE_MULTIPLIER
        )
        for year in _SURGE_YEARS
        for month, day in _SURGE_MONTH_DAYS
    }
)


def _legacy(label: str) -> SpecialDateRule:
    return SpecialDateRule(kind=RuleKind.LEGACY, label=label, multiplier=Decimal("2"))


# Pre-computed 2025 dates quoted before holidays were derived per year.
DEFAULT_LEGACY_RULES: Mapping[str, SpecialDateRule] = MappingProxyType(
    {
        "2025-01-01": _legacy("New Year's Day"),
        "2025-11-27": _legacy("Thanksgiving"),
        "2025-12-15": _legacy("Special Date"),
        "2025-12-23": _legacy("Special Date"),
        "2025-12-24": _legacy("Christmas Eve"),
        "2025-12-25": _legacy("Christmas Day"),
        "2025-12-30": _legacy("Special Date"),
        "2025-12-31": _legacy("New Year's Eve"),
    }
)


@dataclass(frozen=True)
class SpecialDateSchedule:
    """Enumerated surge and legacy tables plus the computed-holiday multiplier."""

    surge_rules: Mapping[str, SpecialDateRule] = field(default_factory=lambda: DEFAULT_SURGE_RULES)
    legacy_rules: Mapping[str, SpecialDateRule] = field(default_factory=lambda: DEFAULT_LEGACY_RULES)
    holiday_multiplier: Decimal = HOLIDAY_MULTIPLIER

    def __post_init__(self) -> None:
        for table, kind in ((self.surge_rules, RuleKind.SURGE), (self.legacy_rules, RuleKind.LEGACY)):
            for key, rule in table.items():
                if rule.kind is not kind:
                    raise ValueError(f"{key}: {rule.kind.value} rule placed in the {kind.value} table")
        object.__setattr__(self, "surge_rules", MappingProxyType(dict(self.surge_rules)))
        object.__setattr__(self, "legacy_rules", MappingProxyType(dict(self.legacy_rules)))


DEFAULT_SCHEDULE = SpecialDateSchedule()


def is_valid_surge_multiplier(multiplier: Decimal) -> bool:
    return SURGE_MULTIPLIER_MIN <= multiplier <= SURGE_MULTIPLIER_MAX


def validate_schedule(schedule: SpecialDateSchedule) -> None:
    """Fail fast if any surge rule's multiplier is outside [1.25, 3.0]."""
    for date_key in sorted(schedule.surge_rules):
        rule = schedule.surge_rules[date_key]
        if rule.multiplier is not None and not is_valid_surge_multiplier(rule.multiplier):
            raise InvalidSurgeMultiplierError(date_key, rule.multiplier)
    logger.info(
        "Special-date schedule validated",
        extra={"surge_dates": len(schedule.surge_rules), "legacy_dates": len(schedule.legacy_rules)},
    )


def _as_listing(date_key: str, rule: SpecialDateRule) -> dict:
    return {
        "date": date_key,
        "multiplier": float(rule.multiplier) if rule.multiplier is not None else None,
        "flat_increase": float(rule.flat_increase) if rule.flat_increase is not None else None,
        "label": rule.label,
        "type": rule.kind.value,
    }


class SpecialDateResolver:
    def __init__(self, schedule: SpecialDateSchedule = DEFAULT_SCHEDULE):
        self.schedule = schedule

    def rules_for(self, kind: RuleKind, year: int) -> Mapping[str, SpecialDateRule]:
        if kind is RuleKind.HOLIDAY:
            return holiday_rules_for_year(year, self.schedule.holiday_multiplier)
        if kind is RuleKind.SURGE:
            return self.schedule.surge_rules
        return self.schedule.legacy_rules

    def resolve(self, date_key: str, year: Optional[int] = None) -> SpecialDateResolution:
        if year is None:
            year = int(date_key[:4])
        for kind in RULE_PRECEDENCE:
            rule = self.rules_for(kind, year).get(date_key)
            if rule is not None:
                return SpecialDateResolution(date_key=date_key, is_special=True, rule=rule)
        return SpecialDateResolution(date_key=date_key, is_special=False)

    def special_dates_for_years(self, years_ahead: int, start_year: int) -> Dict[int, Dict[str, List[dict]]]:
        """List the holiday, surge and legacy dates for ``years_ahead`` years.

        Legacy dates that coincide with a computed holiday are left out since
        they can never be the resolved rule for that date.
        """
        result: Dict[int, Dict[str, List[dict]]] = {}
        for year in range(start_year, start_year + years_ahead):
            prefix = f"{year}-"
            holidays = holiday_rules_for_year(year, self.schedule.holiday_multiplier)
            holiday_list = [_as_listing(k, r) for k, r in sorted(holidays.items())]
            surge_list = [
                _as_listing(k, r) for k, r in sorted(self.schedule.surge_rules.items()) if k.startswith(prefix)
            ]
            legacy_list = [
                _as_listing(k, r)
                for k, r in sorted(self.schedule.legacy_rules.items())
                if k.startswith(prefix) and k not in holidays
            ]
            result[year] = {
                "holidays": holiday_list,
                "surge_dates": surge_list,
                "legacy_dates": legacy_list,
                "all_dates": sorted(holiday_list + surge_list + legacy_list, key=lambda d: d["date"]),
            }
        return result
