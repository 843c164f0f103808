# app/utils/sleep_predictor.py

import json
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from config.settings import OPENAI_API_KEY, OPENAI_MODEL, OPENAI_TIMEOUT_SECONDS
from app.schemas.sleep_prediction_schema import SleepForecast
from app.utils.dates import minutes_between, to_local_naive
from app.utils.fallback_schedule import fallback_forecast

logger = logging.getLogger(__name__)

# (idade máxima em meses, orientação); None = sem limite
AGE_SLEEP_GUIDANCE = (
    (3, "Newborns typically need 14-17 hours of sleep per day, with multiple naps."),
    (6, "Babies 3-6 months typically need 12-15 hours of sleep per day with 3-4 naps."),
    (12, "Babies 6-12 months typically need 11-14 hours of sleep per day with 2-3 naps."),
    (24, "Toddlers 1-2 years typically need 11-14 hours of sleep per day with 1-2 naps."),
    (None, "Children 2+ years typically need 10-13 hours of sleep per day with 1 nap or no naps."),
)

# Valores usados quando a resposta do modelo vem incompleta
DEFAULT_LEAD_TIME = timedelta(hours=2)
DEFAULT_DURATION_MINUTES = 90
DEFAULT_CONFIDENCE = 0.5

PROMPT_TEMPLATE = """
You are an expert pediatric sleep consultant. Your task is to analyze a child's sleep patterns
and predict when they should next go to sleep and for how long.

Child's age: {age} months
{guidance}

Here is the child's recent sleep history:
{history}

Current time: {now}

Analyze the sleep patterns, considering:
1. Time between sleeps
2. Duration of sleeps
3. Quality of sleep
4. Time of day patterns
5. Age-appropriate sleep needs

Provide a prediction in JSON format with these fields:
- nextSleepTime: ISO timestamp for when the child should next go to sleep
- predictedDuration: predicted sleep duration in minutes
- confidence: your confidence in this prediction (0-1)
"""


def age_guidance(age_months: int) -> str:
    for max_age, text in AGE_SLEEP_GUIDANCE:
        if max_age is None or age_months < max_age:
            return text
    return AGE_SLEEP_GUIDANCE[-1][1]


def completed_history(history: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Só sonos já encerrados entram no prompt."""
    completed = []
    for record in history:
        end_time = record.get("end_time")
        if end_time is None:
            continue
        start_time = record["start_time"]
        completed.append({
            "startTime": start_time.isoformat(),
            "endTime": end_time.isoformat(),
            "quality": record.get("quality") or "unknown",
            "duration": minutes_between(start_time, end_time),
        })
    return completed


def build_prompt(age_months: int, history: List[Dict[str, Any]], now: datetime) -> str:
    return PROMPT_TEMPLATE.format(
        age=age_months,
        guidance=age_guidance(age_months),
        history=json.dumps(completed_history(history), indent=2),
        now=now.isoformat(),
    )


def _parse_timestamp(value) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return to_local_naive(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None


def _parse_duration(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    minutes = int(round(value))
    return minutes if minutes > 0 else None


def _parse_confidence(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # 0 conta como ausente, igual a um campo faltando
    return float(value) if 0 < value <= 1 else None


def parse_forecast(content: Optional[str], now: datetime) -> SleepForecast:
    """
    Lê o JSON devolvido pelo modelo. Campo ausente ou inválido recebe o valor
    padrão; conteúdo que nem é JSON levanta ValueError.
    """
    data = json.loads(content or "{}")
    if not isinstance(data, dict):
        data = {}

    next_sleep_time = _parse_timestamp(data.get("nextSleepTime"))
    predicted_duration = _parse_duration(data.get("predictedDuration"))
    confidence = _parse_confidence(data.get("confidence"))

    return SleepForecast(
        next_sleep_time=next_sleep_time or now + DEFAULT_LEAD_TIME,
        predicted_duration=predicted_duration or DEFAULT_DURATION_MINUTES,
        confidence=DEFAULT_CONFIDENCE if confidence is None else confidence,
    )


class SleepPredictor:
    """
    Prevê o próximo sono pedindo ao modelo de linguagem; se a chamada falhar
    por qualquer motivo, usa a tabela de horários (fallback_forecast).
    Não há nova tentativa.
    """

    def __init__(
        self,
        client=None,
        model: str = OPENAI_MODEL,
        api_key: Optional[str] = OPENAI_API_KEY,
        timeout: float = OPENAI_TIMEOUT_SECONDS,
    ):
        self._client = client
        self.model = model
        self.api_key = api_key
        self.timeout = timeout

    def _get_client(self):
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def predict(
        self,
        child_age_months: int,
        history: List[Dict[str, Any]],
        now: Optional[datetime] = None,
    ) -> SleepForecast:
        now = now or datetime.now()
        try:
            client = self._get_client()
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": build_prompt(child_age_months, history, now)}],
                response_format={"type": "json_object"},
            )
            return parse_forecast(response.choices[0].message.content, now)
        except Exception:
            logger.warning("Falha ao prever o próximo sono pelo modelo; usando tabela de horários", exc_info=True)
            return fallback_forecast(now)
