"""Price provider errors."""
from utils.http_client import APIError


class PriceDataUnavailable(APIError):
    """A live source could not supply a usable series."""
