"""
Unit tests for core/assessment/models.py

Tests cover:
- AnswerSet enumerations and unknown keys
- EvaluateRequest name sanitization and email normalization
- Immutability of persisted records
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.assessment.models import AnswerSet, EvaluateRequest, Evaluation, sanitize_name


BEST_ANSWERS = {
    "password": "si",
    "twoFactor": "si",
    "updates": "siempre",
    "publicWifi": "no",
    "backup": "si",
}


def request_payload(**overrides):
    payload = {"name": "Ana Perez", "email": "ana@example.com", "answers": dict(BEST_ANSWERS)}
    payload.update(overrides)
    return payload


class TestAnswerSet:

    def test_accepts_all_valid_values(self):
        answers = AnswerSet(**BEST_ANSWERS)
        assert answers.updates == "siempre"

    def test_unknown_keys_are_ignored(self):
        answers = AnswerSet(**BEST_ANSWERS, firewall="si")
        assert not hasattr(answers, "firewall")
        assert set(answers.model_dump()) == set(BEST_ANSWERS)

    def test_missing_key_is_rejected(self):
        data = dict(BEST_ANSWERS)
        del data["backup"]
        with pytest.raises(ValidationError) as exc_info:
            AnswerSet(**data)
        assert exc_info.value.errors()[0]["loc"] == ("backup",)

    @pytest.mark.parametrize("field,value", [
        ("password", "siempre"),
        ("twoFactor", "yes"),
        ("updates", "si"),
        ("publicWifi", ""),
        ("backup", "a-veces"),
    ])
    def test_invalid_value_is_rejected(self, field, value):
        data = dict(BEST_ANSWERS)
        data[field] = value
        with pytest.raises(ValidationError):
            AnswerSet(**data)

    def test_is_immutable(self):
        answers = AnswerSet(**BEST_ANSWERS)
        with pytest.raises(ValidationError):
            answers.password = "no"


class TestEvaluateRequest:

    def test_name_is_trimmed(self):
        req = EvaluateRequest(**request_payload(name="   Ana   "))
        assert req.name == "Ana"

    def test_markup_characters_are_removed(self):
        req = EvaluateRequest(**request_payload(name="<b>Ana</b>"))
        assert req.name == "bAna/b"

    def test_sanitize_name_strips_quotes_and_ampersands(self):
        assert sanitize_name(" \"Tom\" & 'Jerry' ") == "Tom  Jerry"

    @pytest.mark.parametrize("name", ["A", " A ", "<>", "x" * 51])
    def test_name_length_out_of_range(self, name):
        with pytest.raises(ValidationError) as exc_info:
            EvaluateRequest(**request_payload(name=name))
        assert exc_info.value.errors()[0]["loc"] == ("name",)

    def test_name_length_boundaries_accepted(self):
        assert EvaluateRequest(**request_payload(name="Al")).name == "Al"
        assert len(EvaluateRequest(**request_payload(name="x" * 50)).name) == 50

    def test_email_is_lowercased(self):
        req = EvaluateRequest(**request_payload(email="Ana.Perez@Example.COM"))
        assert req.email == "ana.perez@example.com"

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            EvaluateRequest(**request_payload(email="not-an-email"))

    def test_answers_must_be_an_object(self):
        with pytest.raises(ValidationError):
            EvaluateRequest(**request_payload(answers="si"))


class TestEvaluation:

    def _evaluation(self):
        return Evaluation(
            id="1700000000000-abcdef123456",
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            name="Ana",
            email="ana@example.com",
            score=100,
            recommendations=[],
            answers=AnswerSet(**BEST_ANSWERS),
        )

    def test_is_immutable(self):
        evaluation = self._evaluation()
        with pytest.raises(ValidationError):
            evaluation.score = 10

    def test_recommendations_stored_as_tuple(self):
        assert self._evaluation().recommendations == ()

    def test_summary_projection(self):
        summary = self._evaluation().summary()
        assert summary.model_dump() == {
            "id": "1700000000000-abcdef123456",
            "timestamp": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "name": "Ana",
            "score": 100,
        }

    def test_score_range_enforced(self):
        with pytest.raises(ValidationError):
            Evaluation(**{**self._evaluation().model_dump(), "score": 101})

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            Evaluation(**{**self._evaluation().model_dump(), "timestamp": datetime(2024, 1, 1)})

    def test_defaults_to_as_answered_scoring(self):
        assert self._evaluation().scoring_mode == "as_answered"
