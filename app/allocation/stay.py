"""Length-of-stay helpers for room bookings."""
import math
from datetime import date, datetime


def calculate_nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """
    Number of nights between two dates.

    Order does not matter; partial days round up and the result is never
    less than 1.
    """
    seconds = abs((check_out - check_in).total_seconds())
    return math.ceil(seconds / 86400) or 1


def calculate_total_price(price_per_night: float, nights: int) -> float:
    return price_per_night * nights
