class PricingError(Exception):
    """Base class for pricing engine failures."""


class InvalidInputError(PricingError, ValueError):
    """Raised when an estimate request is malformed.

    ``field`` names the offending input so HTTP handlers can report it.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class InvalidSurgeMultiplierError(PricingError):
    """Raised when a surge rule carries a multiplier outside the allowed band."""

    def __init__(self, date_key: str, multiplier):
        super().__init__(
            f"invalid surge multiplier: {float(multiplier):.2f} on {date_key}. "
            "Must be between 1.25 and 3.0"
        )
        self.date_key = date_key
        self.multiplier = multiplier
