import asyncio
import json
from datetime import datetime, timedelta

import pytest

from app.utils.sleep_predictor import (
    DEFAULT_CONFIDENCE,
    DEFAULT_DURATION_MINUTES,
    SleepPredictor,
    age_guidance,
    build_prompt,
    completed_history,
    parse_forecast,
)

from conftest import make_fake_llm

NOW = datetime(2026, 3, 10, 10, 0)

HISTORY = [
    {"start_time": datetime(2026, 3, 10, 9, 40), "end_time": None, "quality": None},
    {"start_time": datetime(2026, 3, 9, 19, 0), "end_time": datetime(2026, 3, 10, 6, 30), "quality": None},
    {"start_time": datetime(2026, 3, 9, 13, 0), "end_time": datetime(2026, 3, 9, 14, 30), "quality": "average"},
]


def _predict(predictor, age=8, history=HISTORY):
    return asyncio.run(predictor.predict(age, history, now=NOW))


@pytest.mark.parametrize("age, expected", [
    (0, "Newborns"),
    (2, "Newborns"),
    (3, "3-6 months"),
    (11, "6-12 months"),
    (12, "1-2 years"),
    (24, "2+ years"),
    (60, "2+ years"),
])
def test_age_guidance_bands(age, expected):
    assert expected in age_guidance(age)


def test_completed_history_skips_active_sleep():
    entries = completed_history(HISTORY)
    assert len(entries) == 2
    assert entries[0] == {
        "startTime": "2026-03-09T19:00:00",
        "endTime": "2026-03-10T06:30:00",
        "quality": "unknown",
        "duration": 690,
    }
    assert entries[1]["quality"] == "average"


def test_build_prompt_mentions_age_and_time():
    prompt = build_prompt(8, HISTORY, NOW)
    assert "Child's age: 8 months" in prompt
    assert "Babies 6-12 months" in prompt
    assert "Current time: 2026-03-10T10:00:00" in prompt
    assert "nextSleepTime" in prompt


def test_parse_full_response():
    forecast = parse_forecast(
        json.dumps({"nextSleepTime": "2026-03-10T12:45:00", "predictedDuration": 80, "confidence": 0.9}),
        NOW,
    )
    assert forecast.next_sleep_time == datetime(2026, 3, 10, 12, 45)
    assert forecast.predicted_duration == 80
    assert forecast.confidence == 0.9


def test_parse_fills_missing_fields_with_defaults():
    forecast = parse_forecast(json.dumps({"predictedDuration": 45}), NOW)
    assert forecast.next_sleep_time == NOW + timedelta(hours=2)
    assert forecast.predicted_duration == 45
    assert forecast.confidence == DEFAULT_CONFIDENCE


def test_parse_replaces_unusable_values():
    forecast = parse_forecast(
        json.dumps({"nextSleepTime": "soon", "predictedDuration": "long", "confidence": 3}),
        NOW,
    )
    assert forecast.next_sleep_time == NOW + timedelta(hours=2)
    assert forecast.predicted_duration == DEFAULT_DURATION_MINUTES
    assert forecast.confidence == DEFAULT_CONFIDENCE


def test_parse_empty_content_uses_defaults():
    forecast = parse_forecast(None, NOW)
    assert forecast.predicted_duration == 90
    assert forecast.confidence == 0.5


def test_parse_non_json_raises():
    with pytest.raises(ValueError):
        parse_forecast("not json", NOW)


def test_predict_uses_language_model():
    fake = make_fake_llm(content=json.dumps({
        "nextSleepTime": "2026-03-10T12:30:00",
        "predictedDuration": 100,
        "confidence": 0.65,
    }))
    forecast = _predict(SleepPredictor(client=fake, model="test-model"))

    assert forecast.next_sleep_time == datetime(2026, 3, 10, 12, 30)
    assert forecast.predicted_duration == 100
    assert forecast.confidence == 0.65
    call = fake.chat.completions.calls[0]
    assert call["model"] == "test-model"


def test_predict_incomplete_response_uses_defaults():
    forecast = _predict(SleepPredictor(client=make_fake_llm(content="{}")))
    assert forecast.next_sleep_time == NOW + timedelta(hours=2)
    assert forecast.predicted_duration == 90
    assert forecast.confidence == 0.5


def test_predict_falls_back_when_call_fails():
    fake = make_fake_llm(error=TimeoutError("took too long"))
    forecast = _predict(SleepPredictor(client=fake))

    # 10h -> soneca das 13h pela tabela
    assert forecast.next_sleep_time == datetime(2026, 3, 10, 13, 0)
    assert forecast.predicted_duration == 90
    assert forecast.confidence == 0.7
    assert len(fake.chat.completions.calls) == 1


def test_predict_falls_back_on_malformed_response():
    fake = make_fake_llm(content="[oops")
    assert _predict(SleepPredictor(client=fake)).confidence == 0.7


def test_predict_falls_back_without_choices():
    class EmptyCompletions:
        async def create(self, **kwargs):
            return type("Response", (), {"choices": []})()

    fake = type("Client", (), {})()
    fake.chat = type("Chat", (), {"completions": EmptyCompletions()})()
    assert _predict(SleepPredictor(client=fake)).confidence == 0.7


def test_predict_without_api_key_falls_back(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    forecast = _predict(SleepPredictor(api_key=None))
    assert forecast.confidence == 0.7


def test_parse_zero_confidence_counts_as_missing():
    forecast = parse_forecast(json.dumps({"confidence": 0, "predictedDuration": 0}), NOW)
    assert forecast.confidence == DEFAULT_CONFIDENCE
    assert forecast.predicted_duration == DEFAULT_DURATION_MINUTES
