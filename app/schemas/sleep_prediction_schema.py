# app/schemas/sleep_prediction_schema.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.base_schema import CamelModel


class SleepForecast(BaseModel):
    """Resultado do preditor, antes de ser salvo."""
    next_sleep_time: datetime
    predicted_duration: int = Field(..., gt=0)  # minutos
    confidence: float = Field(..., ge=0, le=1)


class SleepPredictionResponse(CamelModel):
    id: int
    child_id: int
    predicted_time: datetime
    predicted_duration: int
    confidence: Optional[float] = None
    created_at: datetime
