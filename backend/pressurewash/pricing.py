import math
from typing import Optional

from .models import ConditionType, Estimate, ServiceType, SizeType


# Pricing constants (whole dollars / plain multipliers)
BASE_BY_SERVICE = {
    "Driveway": 140,
    "House Wash": 260,
    "Deck/Patio": 160,
    "Fence": 180,
}

SIZE_MULTIPLIER = {
    "Small": 0.85,
    "Medium": 1.0,
    "Large": 1.35,
}

CONDITION_MULTIPLIER = {
    "Light": 1.0,
    "Medium": 1.15,
    "Heavy": 1.35,
}

LOW_FACTOR = 0.92
HIGH_FACTOR = 1.12


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; the quote form rounds .5 up
    return int(math.floor(value + 0.5))


def estimate(
    service: Optional[ServiceType],
    size: SizeType = "Medium",
    condition: ConditionType = "Light",
) -> Optional[Estimate]:
    """
    Price range for one job. Returns None until a service has been picked,
    which is what the intake preview shows as a placeholder.

    low and high are each rounded from the unrounded price.
    """
    if not service:
        return None

    price = (
        BASE_BY_SERVICE[service]
        * SIZE_MULTIPLIER[size]
        * CONDITION_MULTIPLIER[condition]
    )

    return Estimate(
        low=_round_half_up(price * LOW_FACTOR),
        high=_round_half_up(price * HIGH_FACTOR),
    )
