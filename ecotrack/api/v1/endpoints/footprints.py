# ecotrack/api/v1/endpoints/footprints.py
from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, status
from ecotrack.api.v1.schemas.questionnaire import QuestionnaireAnswers
from ecotrack.api.v1.schemas.result import FootprintResponse, HistoryResponse, Tier
from ecotrack.core.http_client import export_result
from ecotrack.core.security import get_optional_user_id, get_required_user_id
from ecotrack.db.database import DatabaseUnavailableError, fetch_history, fetch_stats
from ecotrack.services.assessment_service import assemble, build_persistence_payload, save_result
from ecotrack.services.recommendation_engine import EMPTY_RECOMMENDATIONS_MESSAGE
from ecotrack.services.tier_classifier import TIERS
from typing import List, Optional
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

NOT_SAVED_NOTE = "Warning: this result could not be saved to your history."


@router.post(
    "/",
    response_model=FootprintResponse,
    status_code=status.HTTP_200_OK,
    summary="Compute a carbon footprint, its tier and recommendations (Optional Auth)",
    description="Accepts questionnaire answers; all fields are optional. Bearer token is optional.",
)
async def create_footprint(
    background_tasks: BackgroundTasks,
    answers: Optional[QuestionnaireAnswers] = Body(None),
    user_id: Optional[str] = Depends(get_optional_user_id),
) -> FootprintResponse:
    logger.info(f"Received footprint request for user: {user_id or 'anonymous'}")
    if answers is None:
        answers = QuestionnaireAnswers()

    try:
        result = assemble(answers)
    except Exception:
        logger.exception("An unexpected error occurred while computing the footprint.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal server error occurred while computing the footprint.",
        )

    outcome = await save_result(result, user_id)
    background_tasks.add_task(export_result, build_persistence_payload(result, user_id))

    logger.info(f"Footprint computed: {result.footprint.total} t/year ({result.tier.key}), saved={outcome.saved}")
    return FootprintResponse(
        **dict(result),
        message=None if result.recommendations else EMPTY_RECOMMENDATIONS_MESSAGE,
        saved=outcome.saved,
        record_id=outcome.record_id,
        notes=None if outcome.saved else NOT_SAVED_NOTE,
    )


@router.get("/tiers", response_model=List[Tier], summary="Footprint tiers, from lowest to highest")
async def list_tiers() -> List[Tier]:
    return list(TIERS)


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Past footprint results of the authenticated user",
)
def get_history(
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_required_user_id),
) -> HistoryResponse:
    try:
        stats = fetch_stats(user_id)
        items = fetch_history(user_id, limit=limit)
    except DatabaseUnavailableError as e:
        logger.error(f"History unavailable for user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return HistoryResponse(stats=stats, items=items)
