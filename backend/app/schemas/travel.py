from .estimate import CamelModel


class TravelFeeOut(CamelModel):
    is_within_service_area: bool
    distance_miles: float
    travel_fee_per_helper: float
    total_travel_fee: float
    num_helpers: int
    message: str
