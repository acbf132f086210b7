# ecotrack/api/v1/schemas/result.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ecotrack.api.v1.schemas.questionnaire import QuestionnaireAnswers


class FootprintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    transport: float = Field(..., description="Transport emissions, t CO2e/year.")
    housing: float = Field(..., description="Housing emissions per occupant, t CO2e/year.")
    food: float = Field(..., description="Food emissions, t CO2e/year (never below 0.5).")
    consumption: float = Field(..., description="Consumption emissions, t CO2e/year (never negative).")
    total: float = Field(..., description="Sum of the unrounded domains, rounded to 2 decimals.")
    answers: QuestionnaireAnswers = Field(..., description="The answers this footprint was computed from.")


class Tier(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    color: str
    emoji: str
    upper_bound: Optional[float] = Field(None, description="Highest total (inclusive) in this tier; None for the last tier.")


class RecommendationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    icon: str
    title: str
    text: str
    impact: float = Field(..., le=0, description="Estimated change in t CO2e/year (zero or negative).")

    @computed_field
    @property
    def savings(self) -> float:
        """Impact shown as a positive reduction."""
        return abs(self.impact)


class Comparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    national_average: float
    percent_of_average: int
    direction: str = Field(..., description="'below', 'equal' or 'above' the national average.")
    gauge_ratio: float = Field(..., ge=0, le=1, description="Fill ratio of the result gauge.")


class AssessmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    footprint: FootprintResult
    tier: Tier
    recommendations: Tuple[RecommendationItem, ...]
    comparison: Comparison


class PersistencePayload(BaseModel):
    """Flat record handed to the persistence and export collaborators."""

    model_config = ConfigDict(frozen=True)

    transportCO2: float
    foodCO2: float
    housingCO2: float
    consumptionCO2: float
    totalCO2: float
    rawAnswers: Dict[str, Any]
    userId: Optional[str] = None


class SaveOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    saved: bool
    record_id: Optional[str] = None


class FootprintResponse(AssessmentResult):
    message: Optional[str] = Field(None, description="Shown instead of the recommendations when there are none.")
    saved: bool = False
    record_id: Optional[str] = None
    notes: Optional[str] = None


class HistoryItem(BaseModel):
    id: str
    created_at: datetime
    transport_co2: float
    food_co2: float
    housing_co2: float
    consumption_co2: float
    total_co2: float


class HistoryStats(BaseModel):
    count: int = 0
    average: Optional[float] = None
    last: Optional[datetime] = None


class HistoryResponse(BaseModel):
    stats: HistoryStats
    items: List[HistoryItem]
