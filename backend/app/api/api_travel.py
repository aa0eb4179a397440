from fastapi import APIRouter, Query

from ..schemas.travel import TravelFeeOut
from ..services.travel_fee import TravelFeeResult, calculate_travel_fee

router = APIRouter(tags=["travel-fee"])


def travel_payload(result: TravelFeeResult) -> dict:
    return {
        "is_within_service_area": result.is_within_service_area,
        "distance_miles": float(result.distance_miles),
        "travel_fee_per_helper": float(result.travel_fee_per_helper),
        "total_travel_fee": float(result.total_travel_fee),
        "num_helpers": result.num_helpers,
        "message": result.message,
    }


@router.get("/travel-fee", response_model=TravelFeeOut)
def travel_fee(
    distance_miles: float = Query(..., ge=0, allow_inf_nan=False, alias="distanceMiles"),
    num_helpers: int = Query(..., ge=1, alias="numHelpers"),
):
    """Travel surcharge for a one-way driving distance."""
    return travel_payload(calculate_travel_fee(distance_miles, num_helpers))
