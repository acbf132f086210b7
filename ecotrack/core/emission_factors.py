# ecotrack/core/emission_factors.py
"""
Emission factors used by the footprint calculator, in kg CO2e per unit
(ADEME / IPCC orders of magnitude). Changing a value here is a deployment
decision, the table is never edited at runtime.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen(values: dict) -> Mapping[str, float]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class EmissionFactors:
    # kg per km, keyed by car fuel type
    car: Mapping[str, float] = field(default_factory=lambda: _frozen({
        "gasoline": 0.21,
        "diesel": 0.19,
        "electric": 0.05,
        "none": 0.0,
    }))
    flight: float = 285.0            # kg per average round trip
    # kg per m² per year, keyed by heating type
    heating: Mapping[str, float] = field(default_factory=lambda: _frozen({
        "electric": 15.0,
        "gas": 35.0,
        "oil": 45.0,
        "heat-pump": 8.0,
    }))
    housing_base: float = 200.0      # electricity, water... per household
    # kg per year, keyed by diet type
    diet: Mapping[str, float] = field(default_factory=lambda: _frozen({
        "vegan": 1000.0,
        "vegetarian": 1500.0,
        "omnivore": 2500.0,
    }))
    meat_meal: float = 150.0         # applied as meat_meal / 10 per weekly meal
    local_food_bonus: float = -200.0
    food_floor: float = 500.0
    clothing: float = 25.0           # per new garment
    device: float = 200.0            # per new electronic device
    recycling_bonus: float = -100.0
    weeks_per_year: int = 52


EMISSION_FACTORS = EmissionFactors()
