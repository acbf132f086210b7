# ecotrack/services/footprint_calculator.py
"""
Deterministic carbon footprint calculation.

Every domain is computed in kg CO2e/year at full precision and converted to
tonnes at the end. Each domain and the total are rounded to two decimals
independently, half up on the exact binary value, so the rounded domains do
not always add up exactly to the rounded total.
"""
from decimal import ROUND_HALF_UP, Decimal

from ecotrack.api.v1.schemas.questionnaire import (
    ConsumptionAnswers,
    DietType,
    FoodAnswers,
    HousingAnswers,
    QuestionnaireAnswers,
    TransportAnswers,
)
from ecotrack.api.v1.schemas.result import FootprintResult
from ecotrack.core.emission_factors import EMISSION_FACTORS, EmissionFactors
import logging

logger = logging.getLogger(__name__)

KG_PER_TONNE = 1000


def _non_negative(value: float) -> float:
    return max(value, 0)


def round_half_up(value: float, digits: int = 2) -> float:
    """Round ties away from zero. The built-in round() sends 0.125 to 0.12, this gives 0.13."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def transport_kg(transport: TransportAnswers, factors: EmissionFactors = EMISSION_FACTORS) -> float:
    car = _non_negative(transport.carDistance) * factors.weeks_per_year * factors.car[transport.carType.value]
    flights = _non_negative(transport.flights) * factors.flight
    return car + flights


def housing_kg(housing: HousingAnswers, factors: EmissionFactors = EMISSION_FACTORS) -> float:
    """Household emissions shared between occupants (at least one)."""
    heating = _non_negative(housing.homeSize) * factors.heating[housing.heatingType.value]
    people = max(housing.people, 1)
    return (heating + factors.housing_base) / people


def food_kg(food: FoodAnswers, factors: EmissionFactors = EMISSION_FACTORS) -> float:
    emission = factors.diet[food.diet.value]
    if food.diet == DietType.OMNIVORE:
        emission += _non_negative(food.meatMeals) * factors.weeks_per_year * (factors.meat_meal / 10)
    if food.localFood:
        emission += factors.local_food_bonus
    return max(emission, factors.food_floor)


def consumption_kg(consumption: ConsumptionAnswers, factors: EmissionFactors = EMISSION_FACTORS) -> float:
    emission = _non_negative(consumption.clothes) * factors.clothing
    emission += _non_negative(consumption.electronics) * factors.device
    if consumption.recycling:
        emission += factors.recycling_bonus
    return max(emission, 0.0)


def compute(answers: QuestionnaireAnswers, factors: EmissionFactors = EMISSION_FACTORS) -> FootprintResult:
    transport = transport_kg(answers.transport, factors) / KG_PER_TONNE
    housing = housing_kg(answers.housing, factors) / KG_PER_TONNE
    food = food_kg(answers.food, factors) / KG_PER_TONNE
    consumption = consumption_kg(answers.consumption, factors) / KG_PER_TONNE
    total = transport + housing + food + consumption

    logger.debug(f"Footprint computed: transport={transport:.4f} housing={housing:.4f} "
                 f"food={food:.4f} consumption={consumption:.4f} total={total:.4f}")

    return FootprintResult(
        transport=round_half_up(transport),
        housing=round_half_up(housing),
        food=round_half_up(food),
        consumption=round_half_up(consumption),
        total=round_half_up(total),
        answers=answers,
    )
