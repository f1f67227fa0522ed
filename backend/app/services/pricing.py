"""Budget pricing — fixed rate tables and the pure cost breakdown.

All prices are in INR. Nothing in this module performs I/O, so estimates can be
computed and tested without the maps service.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from app.exceptions import ValidationError

INVALID_RATES_MESSAGE = "Invalid budget level or transportation type."


@dataclass(frozen=True)
class TierRates:
    """Per-traveler accommodation and food rates for a budget level."""
    hotel_cost_per_night: float
    food_cost_per_day: float


@dataclass(frozen=True)
class BudgetBreakdown:
    distance_in_km: float
    transportation_cost: float
    food_cost: float
    shopping_cost: float
    hotel_cost: float
    total_cost: float


BUDGET_TIERS: Mapping[str, TierRates] = MappingProxyType({
    "Mid-Range": TierRates(hotel_cost_per_night=1500, food_cost_per_day=600),
    "Luxury": TierRates(hotel_cost_per_night=3000, food_cost_per_day=1200),
})

# Mode → fare class → rate per km per traveler
TRANSPORT_RATES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "Bus": MappingProxyType({
        "Ordinary State Bus": 2,
        "Volvo Non-AC": 3.5,
        "AC Bus": 5,
    }),
    "Train": MappingProxyType({
        "Sleeper": 1.5,
        "AC 3 Tier": 3,
        "AC 2 Tier": 4.5,
        "AC First Class": 7,
    }),
    "Flight": MappingProxyType({
        "Economy": 8,
        "Business": 15,
        "First Class": 25,
    }),
})


def resolve_rates(
    tier: str | None, transport_mode: str | None, transport_subtype: str | None
) -> tuple[TierRates, float]:
    """Look up the tier rates and per-km fare, or raise ``ValidationError``."""
    tier_rates = BUDGET_TIERS.get(tier or "")
    fares = TRANSPORT_RATES.get(transport_mode or "")
    per_km_rate = fares.get(transport_subtype or "") if fares else None
    if tier_rates is None or per_km_rate is None:
        raise ValidationError(INVALID_RATES_MESSAGE)
    return tier_rates, per_km_rate


def parse_shopping_amount(amount: str | float | int | None) -> float:
    """Parse an optional shopping amount; blank or unparsable input counts as 0."""
    if amount is None or amount == "":
        return 0.0
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    # float() accepts "nan" and "inf"
    return value if math.isfinite(value) else 0.0


def compute_budget(
    distance_km: float,
    nights: int,
    travelers: int,
    tier: str,
    transport_mode: str,
    transport_subtype: str,
    shopping_amount: str | float | int | None = None,
) -> BudgetBreakdown:
    tier_rates, per_km_rate = resolve_rates(tier, transport_mode, transport_subtype)

    transportation_cost = travelers * distance_km * per_km_rate
    food_cost = travelers * nights * tier_rates.food_cost_per_day
    hotel_cost = travelers * nights * tier_rates.hotel_cost_per_night
    shopping_cost = parse_shopping_amount(shopping_amount)
    total_cost = transportation_cost + food_cost + shopping_cost + hotel_cost

    return BudgetBreakdown(
        distance_in_km=distance_km,
        transportation_cost=transportation_cost,
        food_cost=food_cost,
        shopping_cost=shopping_cost,
        hotel_cost=hotel_cost,
        total_cost=total_cost,
    )
