"""Booking deposit recommendation.

Deposits are quoted as "professional" amounts: multiples of $50 from $50 to
$5000. The calculator aims for 22.5% of the estimate, restricted to lattice
points inside the 15-30% band. When the band holds no lattice point (small
estimates) the whole lattice is searched instead, so the resulting percentage
can fall outside 15-30%. Amounts above the ceiling saturate at $5000.

All arithmetic here is in integer cents; callers holding dollars convert with
:func:`app.utils.currency.dollars_to_cents` before calling in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from app.utils.currency import cents_to_dollars, dollars_to_cents, quantize, to_cents

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")
_TENTH = Decimal("0.1")
FLOOR_STEP_CENTS = 50


@dataclass(frozen=True)
class DepositPolicy:
    min_percent: Decimal = Decimal("0.15")
    max_percent: Decimal = Decimal("0.30")
    # Tuned on its own; it only happens to equal the band midpoint today.
    target_percent: Decimal = Decimal("0.225")
    lattice_step_cents: int = 5000
    lattice_max_cents: int = 500000

    def __post_init__(self) -> None:
        if self.lattice_step_cents <= 0:
            raise ValueError("lattice_step_cents must be positive")
        if self.lattice_max_cents < self.lattice_step_cents:
            raise ValueError("lattice_max_cents must be at least one lattice step")
        if not Decimal("0") <= self.min_percent <= self.max_percent:
            raise ValueError("deposit band must satisfy 0 <= min_percent <= max_percent")


DEFAULT_DEPOSIT_POLICY = DepositPolicy()


@dataclass(frozen=True)
class DepositCalculation:
    value: int
    percentage: float
    min_amount: int
    max_amount: int
    target_amount: int
    floored_amount: int
    picked_by: str
    estimate_cents: int


def professional_amounts(policy: DepositPolicy = DEFAULT_DEPOSIT_POLICY) -> Tuple[int, ...]:
    step = policy.lattice_step_cents
    return tuple(range(step, policy.lattice_max_cents + 1, step))


def round_up_to_professional_amount(amount: int, candidates: Sequence[int]) -> int:
    """Return the smallest candidate >= ``amount``, saturating at both ends."""
    if not candidates:
        return amount
    if amount <= candidates[0]:
        return candidates[0]
    for candidate in candidates:
        if candidate >= amount:
            return candidate
    return candidates[-1]


def _percent_of(value: int, estimate: int) -> Decimal:
    if estimate <= 0:
        return Decimal("0.0")
    return quantize(Decimal(value) * _HUNDRED / Decimal(estimate), _TENTH)


class DepositCalculator:
    def __init__(self, policy: DepositPolicy = DEFAULT_DEPOSIT_POLICY):
        self.policy = policy
        self.lattice = professional_amounts(policy)

    def calculate_from_estimate(self, estimate_cents: Any) -> DepositCalculation:
        estimate = to_cents(estimate_cents)
        est = Decimal(estimate)
        p = self.policy

        min_range = est * p.min_percent
        max_range = est * p.max_percent
        target = est * p.target_percent

        floored = int((target / FLOOR_STEP_CENTS).to_integral_value(rounding=ROUND_FLOOR)) * FLOOR_STEP_CENTS

        in_range = [amount for amount in self.lattice if min_range <= amount <= max_range]
        candidates = in_range or list(self.lattice)

        target_amount = int(target)
        value = round_up_to_professional_amount(target_amount, candidates)
        percentage = _percent_of(value, estimate)

        logger.debug(
            "Deposit computed",
            extra={
                "estimate_cents": estimate,
                "deposit_cents": value,
                "in_band_candidates": len(in_range),
            },
        )
        return DepositCalculation(
            value=value,
            percentage=float(percentage),
            min_amount=int(min_range),
            max_amount=int(max_range),
            target_amount=target_amount,
            floored_amount=floored,
            picked_by=f"calculated_{percentage:.1f}%_of_estimate",
            estimate_cents=estimate,
        )

    def deposit_sections(self, calc: DepositCalculation) -> Dict[str, Dict[str, Any]]:
        """Recommended / range / calculation blocks attached to an estimate response."""
        p = self.policy
        min_pct = float(p.min_percent * _HUNDRED)
        max_pct = float(p.max_percent * _HUNDRED)
        amount = cents_to_dollars(calc.value)
        return {
            "recommended": {
                "amount_cents": calc.value,
                "amount": amount,
                "percentage": calc.percentage,
                "picked_by": calc.picked_by,
                "is_manual_override": False,
                "estimate_source": "provided",
            },
            "range": {
                "min_percent": min_pct,
                "max_percent": max_pct,
                "min_amount_cents": calc.min_amount,
                "max_amount_cents": calc.max_amount,
                "min_amount": cents_to_dollars(calc.min_amount),
                "max_amount": cents_to_dollars(calc.max_amount),
                "description": (
                    f"Target booking deposits stay between {min_pct:g}% and {max_pct:g}% of the estimate."
                ),
            },
            "calculation": {
                "estimate_cents": calc.estimate_cents,
                "target_amount_cents": calc.target_amount,
                "target_amount": cents_to_dollars(calc.target_amount),
                "floored_target_cents": calc.floored_amount,
                "floored_target_amount": cents_to_dollars(calc.floored_amount),
                "summary": (
                    f"Recommended deposit is ${amount:.2f} (~{calc.percentage:.1f}% of the total), "
                    "rounded up to the nearest professional amount."
                ),
            },
        }

    def resolve(self, estimate_cents: Optional[int] = None, deposit_cents: Optional[int] = None) -> Dict[str, Any]:
        """Pick the deposit to charge: a manual amount wins over the calculated one.

        Callers must supply at least one of the two amounts.
        """
        if estimate_cents is None and deposit_cents is None:
            raise ValueError("estimate_cents or deposit_cents is required")

        result: Dict[str, Any] = {
            "requested_estimate": None,
            "calculation": None,
            "percentage": None,
        }
        calc = None
        if estimate_cents is not None:
            calc = self.calculate_from_estimate(estimate_cents)
            result["requested_estimate"] = cents_to_dollars(calc.estimate_cents)
            result["calculation"] = {
                "deposit": cents_to_dollars(calc.value),
                "percentage": calc.percentage,
                "picked_by": calc.picked_by,
                "min_range": cents_to_dollars(calc.min_amount),
                "max_range": cents_to_dollars(calc.max_amount),
                "target": cents_to_dollars(calc.target_amount),
            }

        if deposit_cents is not None:
            chosen = to_cents(deposit_cents)
            result.update(
                deposit=cents_to_dollars(chosen),
                deposit_cents=chosen,
                picked_by="manual",
                is_manual_override=True,
            )
            if calc is not None:
                result["percentage"] = float(_percent_of(chosen, calc.estimate_cents))
        else:
            result.update(
                deposit=cents_to_dollars(calc.value),
                deposit_cents=calc.value,
                percentage=calc.percentage,
                picked_by=calc.picked_by,
                is_manual_override=False,
            )
        return result

    def deposit_table(self, estimates_dollars: Iterable[Any]) -> List[Dict[str, Any]]:
        """Deposit ladder for a set of estimates, flagging picks outside the band."""
        rows = []
        for estimate in estimates_dollars:
            calc = self.calculate_from_estimate(dollars_to_cents(estimate))
            rows.append(
                {
                    "estimate": cents_to_dollars(calc.estimate_cents),
                    "deposit": cents_to_dollars(calc.value),
                    "percentage": calc.percentage,
                    "in_band": calc.min_amount <= calc.value <= calc.max_amount,
                }
            )
        return rows


DEFAULT_TABLE_ESTIMATES = (200, 300, 500, 1000, 2000, 5000, 10000)

_default_calculator = DepositCalculator()


def calculate_deposit_from_estimate(estimate_cents: Any) -> DepositCalculation:
    return _default_calculator.calculate_from_estimate(estimate_cents)
