# app/utils/fallback_schedule.py

from collections import namedtuple
from datetime import datetime, time, timedelta
from typing import Optional

from app.schemas.sleep_prediction_schema import SleepForecast

ScheduleBand = namedtuple(
    "ScheduleBand",
    ["name", "start_hour", "end_hour", "target", "duration_minutes", "next_band"],
)

# Avaliada em ordem pela hora atual; next_band é usada se o alvo já passou
FALLBACK_SCHEDULE = (
    ScheduleBand("morning_nap",   0,  9,  time(9, 30),  90,  "midday_nap"),
    ScheduleBand("midday_nap",    9,  13, time(13, 0),  90,  None),
    ScheduleBand("afternoon_nap", 13, 18, time(16, 0),  60,  "bedtime"),
    ScheduleBand("bedtime",       18, 24, time(19, 30), 600, None),
)

FALLBACK_CONFIDENCE = 0.7
MINIMUM_LEAD = timedelta(minutes=30)


def _band_for_hour(hour: int) -> ScheduleBand:
    for band in FALLBACK_SCHEDULE:
        if band.start_hour <= hour < band.end_hour:
            return band
    raise ValueError(f"Hora fora da tabela: {hour}")


def _band_named(name: str) -> ScheduleBand:
    return next(band for band in FALLBACK_SCHEDULE if band.name == name)


def fallback_forecast(now: Optional[datetime] = None) -> SleepForecast:
    """
    Previsão por horário do dia, sem olhar o histórico da criança.
    Usada quando a chamada ao modelo de linguagem falha.
    """
    now = now or datetime.now()
    band = _band_for_hour(now.hour)
    target = datetime.combine(now.date(), band.target)

    if target <= now and band.next_band:
        band = _band_named(band.next_band)
        target = datetime.combine(now.date(), band.target)

    if target <= now:
        target = now + MINIMUM_LEAD

    return SleepForecast(
        next_sleep_time=target,
        predicted_duration=band.duration_minutes,
        confidence=FALLBACK_CONFIDENCE,
    )
