# ecotrack/services/recommendation_engine.py
"""
Rule-based reduction advice.

Each rule pairs a predicate over the raw questionnaire answers with a canned
recommendation. Rules are evaluated in the order of RULES and the first
MAX_RECOMMENDATIONS matches are kept. Impacts are illustrative constants,
they do not depend on how far the answers are past the threshold.
"""
from dataclasses import dataclass
from itertools import islice
from typing import Callable, Iterator, Optional, Tuple

from ecotrack.api.v1.schemas.questionnaire import CarType, DietType, HeatingType, QuestionnaireAnswers
from ecotrack.api.v1.schemas.result import FootprintResult, RecommendationItem

MAX_RECOMMENDATIONS = 4

EMPTY_RECOMMENDATIONS_MESSAGE = "Well done! Your footprint is already excellent. Keep it up!"


@dataclass(frozen=True)
class RecommendationRule:
    id: str
    applies: Callable[[QuestionnaireAnswers], bool]
    item: RecommendationItem


RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule(
        id="car-alternatives",
        applies=lambda a: a.transport.carType != CarType.NONE and a.transport.carDistance > 100,
        item=RecommendationItem(
            id="car-alternatives",
            icon="🚲",
            title="Choose alternatives to the car",
            text="Cycling or public transport for short trips can significantly reduce your footprint.",
            impact=-0.5,
        ),
    ),
    RecommendationRule(
        id="fewer-flights",
        applies=lambda a: a.transport.flights > 4,
        item=RecommendationItem(
            id="fewer-flights",
            icon="🚆",
            title="Fly less",
            text="Take the train for trips within Europe: a Paris-Nice round trip by rail emits 90% less CO₂.",
            impact=-1.5,
        ),
    ),
    RecommendationRule(
        id="heating",
        applies=lambda a: a.housing.heatingType in (HeatingType.OIL, HeatingType.GAS),
        item=RecommendationItem(
            id="heating",
            icon="🌡️",
            title="Optimize your heating",
            text="Lowering the temperature by 1°C saves 7%. Consider insulation and switching to a heat pump.",
            impact=-0.8,
        ),
    ),
    RecommendationRule(
        id="less-meat",
        applies=lambda a: a.food.diet == DietType.OMNIVORE and a.food.meatMeals > 7,
        item=RecommendationItem(
            id="less-meat",
            icon="🥗",
            title="Eat less meat",
            text="Replace 2 meat-based meals per week with plant-based alternatives.",
            impact=-0.6,
        ),
    ),
    RecommendationRule(
        id="local-food",
        applies=lambda a: not a.food.localFood,
        item=RecommendationItem(
            id="local-food",
            icon="🌽",
            title="Eat local and seasonal",
            text="Local products travel fewer kilometres and are often fresher.",
            impact=-0.2,
        ),
    ),
    RecommendationRule(
        id="sustainable-fashion",
        applies=lambda a: a.consumption.clothes > 20,
        item=RecommendationItem(
            id="sustainable-fashion",
            icon="👕",
            title="Sustainable fashion",
            text="Prefer second-hand and quality clothing that lasts longer.",
            impact=-0.3,
        ),
    ),
    RecommendationRule(
        id="recycling",
        applies=lambda a: not a.consumption.recycling,
        item=RecommendationItem(
            id="recycling",
            icon="♻️",
            title="Sort your waste",
            text="Sorting lets materials be recycled and reduces landfill.",
            impact=-0.1,
        ),
    ),
)


def matching_rules(answers: QuestionnaireAnswers) -> Iterator[RecommendationRule]:
    return (rule for rule in RULES if rule.applies(answers))


def recommend(
    answers: QuestionnaireAnswers,
    footprint: Optional[FootprintResult] = None,
) -> Tuple[RecommendationItem, ...]:
    # rules only read the raw answers
    return tuple(rule.item for rule in islice(matching_rules(answers), MAX_RECOMMENDATIONS))
