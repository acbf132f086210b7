# ecotrack/services/tier_classifier.py
from typing import Tuple

from ecotrack.api.v1.schemas.result import Comparison, Tier
from ecotrack.services.footprint_calculator import round_half_up

# Ordered from the lowest to the highest footprint; the last tier is unbounded.
TIERS: Tuple[Tier, ...] = (
    Tier(key="excellent", label="Excellent", color="#22c55e", emoji="🌟", upper_bound=4),
    Tier(key="good", label="Good", color="#84cc16", emoji="👍", upper_bound=6),
    Tier(key="average", label="Average", color="#eab308", emoji="📊", upper_bound=9),
    Tier(key="high", label="High", color="#f97316", emoji="⚠️", upper_bound=12),
    Tier(key="very-high", label="Very high", color="#ef4444", emoji="🚨", upper_bound=None),
)

# French per-capita footprint, t CO2e/year
NATIONAL_AVERAGE = 9.5
# Total that fills the result gauge completely
GAUGE_MAX = 15.0


def classify(total: float) -> Tier:
    """Return the first tier whose upper bound is >= total (boundaries belong to the lower tier)."""
    for tier in TIERS:
        if tier.upper_bound is None or total <= tier.upper_bound:
            return tier
    return TIERS[-1]


def compare_to_average(total: float, national_average: float = NATIONAL_AVERAGE) -> Comparison:
    if total < national_average:
        direction = "below"
    elif total > national_average:
        direction = "above"
    else:
        direction = "equal"

    return Comparison(
        national_average=national_average,
        percent_of_average=int(round_half_up(total / national_average * 100, 0)),
        direction=direction,
        gauge_ratio=min(max(total / GAUGE_MAX, 0.0), 1.0),
    )
