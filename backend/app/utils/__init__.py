from .errors import error_response
from .currency import cents_to_dollars, dollars_to_cents, money
