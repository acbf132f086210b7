# ecotrack/services/assessment_service.py
"""
Assembles a complete footprint assessment and hands it to the persistence
collaborator.

`assemble` is pure: no I/O, no clock, identical answers give identical
results. `save_result` is the only part that touches the database; it never
raises and never changes the result it is given.
"""
import asyncio
import logging
import time
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ecotrack.api.v1.schemas.questionnaire import QuestionnaireAnswers
from ecotrack.api.v1.schemas.result import AssessmentResult, PersistencePayload, SaveOutcome
from ecotrack.core.config import settings
from ecotrack.db.database import insert_calculation
from ecotrack.services.footprint_calculator import compute
from ecotrack.services.recommendation_engine import recommend
from ecotrack.services.tier_classifier import classify, compare_to_average

logger = logging.getLogger(__name__)


class InvalidAnswersError(ValueError):
    """Raised when questionnaire answers have the wrong type."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid answer for '{field}': {message}")
        self.field = field


def parse_answers(raw: Optional[Mapping[str, Any]]) -> QuestionnaireAnswers:
    """
    Validates raw answers for callers that do not go through the HTTP API, such as
    batch imports or scripts. The endpoint gets the same model validated by FastAPI
    and returns its 422 instead.

    Raises InvalidAnswersError naming the first offending field, e.g. "housing.homeSize".
    """
    try:
        return QuestionnaireAnswers.model_validate(raw or {})
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "answers"
        raise InvalidAnswersError(field, first["msg"]) from e


def assemble(answers: QuestionnaireAnswers) -> AssessmentResult:
    footprint = compute(answers)
    return AssessmentResult(
        footprint=footprint,
        tier=classify(footprint.total),
        recommendations=recommend(answers, footprint),
        comparison=compare_to_average(footprint.total),
    )


def build_persistence_payload(result: AssessmentResult, user_id: Optional[str] = None) -> PersistencePayload:
    footprint = result.footprint
    return PersistencePayload(
        transportCO2=footprint.transport,
        foodCO2=footprint.food,
        housingCO2=footprint.housing,
        consumptionCO2=footprint.consumption,
        totalCO2=footprint.total,
        rawAnswers=footprint.answers.model_dump(mode="json"),
        userId=user_id,
    )


async def save_result(
    result: AssessmentResult,
    user_id: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SaveOutcome:
    """
    Best-effort save: a failure or a save slower than the timeout is reported as not saved.

    The worker thread cannot be cancelled, so the insert also gets the same deadline and
    rolls back instead of committing once it has passed. A commit that starts just before
    the deadline can still land after the wait has given up; that row is then stored
    although the response says `saved=False`.
    """
    timeout = timeout if timeout is not None else settings.PERSISTENCE_TIMEOUT_SECONDS
    payload = build_persistence_payload(result, user_id)
    owner = user_id or "anonymous"
    deadline = time.monotonic() + timeout

    try:
        record_id = await asyncio.wait_for(asyncio.to_thread(insert_calculation, payload, deadline), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Saving the footprint for {owner} took longer than {timeout}s; abandoned.")
        return SaveOutcome(saved=False)
    except Exception as e:
        logger.warning(f"Could not save the footprint for {owner}: {e}")
        return SaveOutcome(saved=False)

    if record_id is None:
        logger.warning(f"The footprint for {owner} was not saved. The result is still returned.")
        return SaveOutcome(saved=False)
    return SaveOutcome(saved=True, record_id=record_id)
