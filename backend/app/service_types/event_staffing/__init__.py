from .errors import InvalidInputError, InvalidSurgeMultiplierError, PricingError
from .rates import DEFAULT_RATE_TABLE, RateEntry, RateTable
from .special_dates import (
    DEFAULT_SCHEDULE,
    RULE_PRECEDENCE,
    RuleKind,
    SpecialDateResolution,
    SpecialDateResolver,
    SpecialDateRule,
    SpecialDateSchedule,
    validate_schedule,
)
from .estimate import EstimateCalculator, EstimateResult, calculate_estimate

__all__ = [
    "DEFAULT_RATE_TABLE",
    "DEFAULT_SCHEDULE",
    "EstimateCalculator",
    "EstimateResult",
    "InvalidInputError",
    "InvalidSurgeMultiplierError",
    "PricingError",
    "RULE_PRECEDENCE",
    "RateEntry",
    "RateTable",
    "RuleKind",
    "SpecialDateResolution",
    "SpecialDateResolver",
    "SpecialDateRule",
    "SpecialDateSchedule",
    "calculate_estimate",
    "validate_schedule",
]
