from fastapi import APIRouter, Query
import logging

from ..schemas.deposit import DepositCalculateIn, DepositCalculateOut
from ..services.deposit_calculator import DEFAULT_TABLE_ESTIMATES, DepositCalculator
from ..utils.currency import dollars_to_cents
from ..utils.errors import error_response
from ..utils.metrics import Timer, incr

router = APIRouter(tags=["deposits"])
logger = logging.getLogger(__name__)

deposits = DepositCalculator()


def _resolve(estimate_cents: int | None, deposit_cents: int | None, show_table: bool) -> dict:
    if estimate_cents is None and deposit_cents is None:
        raise error_response(
            "No estimate or deposit provided",
            {"estimate": "required", "deposit": "required"},
        )
    with Timer("deposit.calculate.ms"):
        payload = deposits.resolve(estimate_cents=estimate_cents, deposit_cents=deposit_cents)
        if show_table:
            payload["table"] = deposits.deposit_table(DEFAULT_TABLE_ESTIMATES)
    incr("deposit.calculated", tags={"manual": payload["is_manual_override"]})
    return payload


@router.post("/deposit/calculate", response_model=DepositCalculateOut)
def calculate_deposit(body: DepositCalculateIn):
    """Recommend a deposit from an estimate, or echo a manual override.

    ``estimateCents`` wins over ``estimateDollars`` when both are sent.
    """
    estimate_cents = body.estimate_cents
    if estimate_cents is None and body.estimate_dollars is not None:
        estimate_cents = dollars_to_cents(body.estimate_dollars)
    deposit_cents = dollars_to_cents(body.deposit_dollars) if body.deposit_dollars is not None else None
    return _resolve(estimate_cents, deposit_cents, body.show_table)


@router.get("/deposit/calculate", response_model=DepositCalculateOut)
def calculate_deposit_query(
    estimate: float | None = Query(None, allow_inf_nan=False, description="Estimate total in dollars"),
    deposit: float | None = Query(None, ge=0, allow_inf_nan=False, description="Manual deposit in dollars"),
    show_table: bool = Query(False, alias="showTable"),
):
    """Query-string variant of :func:`calculate_deposit`; both amounts in dollars."""
    estimate_cents = dollars_to_cents(estimate) if estimate is not None else None
    deposit_cents = dollars_to_cents(deposit) if deposit is not None else None
    return _resolve(estimate_cents, deposit_cents, show_table)
