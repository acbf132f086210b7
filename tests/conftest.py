"""Shared questionnaire fixtures for the EcoTrack test suite."""

import pytest

from ecotrack.api.v1.schemas.questionnaire import QuestionnaireAnswers


def _make_answers(**groups) -> QuestionnaireAnswers:
    return QuestionnaireAnswers.model_validate(groups)


@pytest.fixture
def make_answers():
    """Build answers from partial domain groups, e.g. make_answers(food={"diet": "vegan"})."""
    return _make_answers


@pytest.fixture
def low_impact_answers() -> QuestionnaireAnswers:
    """No car, no flights, vegan, local food, recycling: nothing left to recommend."""
    return _make_answers(
        transport={"carDistance": 0, "carType": "none", "flights": 0},
        housing={"homeSize": 0, "heatingType": "electric", "people": 1},
        food={"diet": "vegan", "meatMeals": 0, "localFood": True},
        consumption={"clothes": 0, "electronics": 0, "recycling": True},
    )


@pytest.fixture
def meat_eater_answers() -> QuestionnaireAnswers:
    """Omnivore with 10 meat meals a week, not buying local; everything else default."""
    return _make_answers(food={"diet": "omnivore", "meatMeals": 10, "localFood": False})


@pytest.fixture
def heavy_answers() -> QuestionnaireAnswers:
    """Every recommendation rule matches."""
    return _make_answers(
        transport={"carDistance": 200, "carType": "gasoline", "flights": 6},
        housing={"homeSize": 100, "heatingType": "gas", "people": 2},
        food={"diet": "omnivore", "meatMeals": 14, "localFood": False},
        consumption={"clothes": 30, "electronics": 2, "recycling": False},
    )
