import os
import sys
import tempfile

import pytest

# Settings are read at import time; point them somewhere harmless first.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="security-dashboard-tests-"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.assessment.models import AnswerSet  # noqa: E402
from core.assessment.service import EvaluationService  # noqa: E402
from core.assessment.store import InMemoryEvaluationStore  # noqa: E402


BEST_ANSWERS = {
    "password": "si",
    "twoFactor": "si",
    "updates": "siempre",
    "publicWifi": "no",
    "backup": "si",
}

WORST_ANSWERS = {
    "password": "no",
    "twoFactor": "no",
    "updates": "nunca",
    "publicWifi": "si",
    "backup": "no",
}


@pytest.fixture
def make_answers():
    def _make(**overrides) -> AnswerSet:
        data = dict(BEST_ANSWERS)
        data.update(overrides)
        return AnswerSet(**data)
    return _make


@pytest.fixture
def memory_store():
    return InMemoryEvaluationStore()


@pytest.fixture
def service(memory_store):
    return EvaluationService(memory_store)


@pytest.fixture
def client(memory_store):
    from fastapi.testclient import TestClient

    from main import app, get_service

    app.dependency_overrides[get_service] = lambda: EvaluationService(memory_store)
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
