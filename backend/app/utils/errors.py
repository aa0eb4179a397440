from typing import Dict
from fastapi import HTTPException, status
import logging

from app.service_types.event_staffing.errors import (
    InvalidInputError,
    InvalidSurgeMultiplierError,
    PricingError,
)

logger = logging.getLogger(__name__)


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.error("%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)


def pricing_error_response(exc: PricingError) -> HTTPException:
    """Map a pricing engine error onto the standard error envelope.

    Bad request fields are a 422; a surge table with an out-of-range
    multiplier is reported as a 400 against the event date.
    """
    if isinstance(exc, InvalidInputError):
        return error_response(exc.message, {exc.field: "invalid"})
    if isinstance(exc, InvalidSurgeMultiplierError):
        return error_response(
            str(exc),
            {"event_date": "invalid_surge_multiplier"},
            status.HTTP_400_BAD_REQUEST,
        )
    return error_response(str(exc) or "Pricing error", {}, status.HTTP_400_BAD_REQUEST)
