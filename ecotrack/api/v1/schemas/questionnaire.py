# ecotrack/api/v1/schemas/questionnaire.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class CarType(str, Enum):
    GASOLINE = "gasoline"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    NONE = "none"


class HeatingType(str, Enum):
    ELECTRIC = "electric"
    GAS = "gas"
    OIL = "oil"
    HEAT_PUMP = "heat-pump"


class DietType(str, Enum):
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    OMNIVORE = "omnivore"


# Values sent by the original (French) questionnaire form
CHOICE_ALIASES = {
    "essence": "gasoline",
    "electrique": "electric",
    "électrique": "electric",
    "gaz": "gas",
    "fioul": "oil",
    "pompe": "heat-pump",
    "végétarien": "vegetarian",
    "vegetarien": "vegetarian",
}


class AnswerGroup(BaseModel):
    """Base for every questionnaire group: absent or null answers fall back to their defaults."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def _fill_defaults(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if isinstance(value, str):
            normalized = value.strip().lower()
            return CHOICE_ALIASES.get(normalized, normalized)
        return value


class TransportAnswers(AnswerGroup):
    carDistance: float = Field(0.0, description="Car distance per week, in km.")
    carType: CarType = Field(CarType.NONE, description="Fuel type of the car used.")
    flights: int = Field(0, description="Round-trip flights per year.")


class HousingAnswers(AnswerGroup):
    homeSize: float = Field(0.0, description="Home floor area, in m².")
    heatingType: HeatingType = Field(HeatingType.ELECTRIC, description="Main heating energy.")
    people: int = Field(1, description="Number of people living in the household.")


class FoodAnswers(AnswerGroup):
    diet: DietType = Field(DietType.OMNIVORE, description="Diet type.")
    meatMeals: int = Field(0, description="Meals containing meat per week (omnivore only).")
    localFood: bool = Field(False, description="Whether food is mostly bought locally.")


class ConsumptionAnswers(AnswerGroup):
    clothes: int = Field(0, description="New clothing items bought per year.")
    electronics: int = Field(0, description="New electronic devices bought per year.")
    recycling: bool = Field(False, description="Whether household waste is sorted and recycled.")


class QuestionnaireAnswers(AnswerGroup):
    transport: TransportAnswers = Field(default_factory=TransportAnswers)
    housing: HousingAnswers = Field(default_factory=HousingAnswers)
    food: FoodAnswers = Field(default_factory=FoodAnswers)
    consumption: ConsumptionAnswers = Field(default_factory=ConsumptionAnswers)
