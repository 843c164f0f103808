import json
import os
from types import SimpleNamespace

import pytest

# Banco em memória e sem chave da OpenAI durante os testes
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("OPENAI_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402
from app.dependencies.predictor import get_predictor  # noqa: E402
from app.storage.sleep_storage import SleepStorage  # noqa: E402
from app.utils.sleep_predictor import SleepPredictor  # noqa: E402


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_fake_llm(content=None, error=None):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content, error)))


LLM_PAYLOAD = {
    "nextSleepTime": "2030-01-01T13:00:00",
    "predictedDuration": 75,
    "confidence": 0.82,
}


@pytest.fixture
def fake_llm():
    return make_fake_llm(content=json.dumps(LLM_PAYLOAD))


@pytest.fixture
def client(fake_llm):
    app.dependency_overrides[get_predictor] = lambda: SleepPredictor(client=fake_llm)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def storage(client):
    db = app.state.session_factory()
    try:
        yield SleepStorage(db)
    finally:
        db.close()


@pytest.fixture
def child(client):
    response = client.post(
        "/api/children",
        json={"name": "Maya", "birthDate": "2025-01-15", "gender": "female"},
    )
    assert response.status_code == 201
    return response.json()
