import logging

from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime, timedelta

from config.settings import PREDICTION_CACHE_MINUTES
from app.schemas.sleep_prediction_schema import SleepPredictionResponse
from app.dependencies.storage import get_storage
from app.dependencies.predictor import get_predictor
from app.storage.sleep_storage import SleepStorage
from app.utils.dates import age_in_months
from app.utils.sleep_predictor import SleepPredictor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children", tags=["sleep prediction"])


@router.get("/{child_id}/sleep-prediction", response_model=SleepPredictionResponse)
async def get_sleep_prediction(
    child_id: int,
    storage: SleepStorage = Depends(get_storage),
    predictor: SleepPredictor = Depends(get_predictor),
):
    """
    Retorna a previsão mais recente se tiver menos de PREDICTION_CACHE_MINUTES.
    Caso contrário, gera uma nova (modelo de linguagem ou tabela de horários) e salva.
    """
    now = datetime.now()

    existing = storage.get_latest_sleep_prediction(child_id)
    if existing and now - existing.created_at < timedelta(minutes=PREDICTION_CACHE_MINUTES):
        logger.info("Reaproveitando previsão %s da criança %s", existing.id, child_id)
        return existing

    child = storage.get_child(child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")

    history = [
        {
            "start_time": record.start_time,
            "end_time": record.end_time,
            "quality": record.quality,
        }
        for record in storage.list_sleep_records(child_id)
    ]

    forecast = await predictor.predict(age_in_months(child.birth_date), history, now=now)
    prediction = storage.create_sleep_prediction(child_id, forecast)
    logger.info(
        "Nova previsão %s para a criança %s: %s (%s min, confiança %.2f)",
        prediction.id, child_id, prediction.predicted_time,
        prediction.predicted_duration, prediction.confidence,
    )
    return prediction
