from __future__ import annotations

import re
from typing import List, Literal, Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, EmailStr, Field, field_validator


YesNo = Literal["si", "no"]
Frequency = Literal["siempre", "a-veces", "nunca"]
Priority = Literal["alta", "media"]
ScoringMode = Literal["as_answered", "risk_aware_wifi"]

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

_MARKUP_CHARS = re.compile(r"[<>&\"'`]")


class AnswerSet(BaseModel):
    # unknown question keys are dropped, not rejected
    model_config = ConfigDict(frozen=True, extra="ignore")

    password: YesNo
    twoFactor: YesNo
    updates: Frequency
    publicWifi: YesNo
    backup: YesNo


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    priority: Priority


class EvaluationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: AwareDatetime
    name: str
    score: int


class Evaluation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: AwareDatetime
    name: str
    email: str
    score: int = Field(ge=0, le=100)
    recommendations: Tuple[Recommendation, ...] = ()
    answers: AnswerSet
    # older records predate this field and were all scored as answered
    scoring_mode: ScoringMode = "as_answered"

    def summary(self) -> EvaluationSummary:
        return EvaluationSummary(
            id=self.id,
            timestamp=self.timestamp,
            name=self.name,
            score=self.score,
        )


class ScoreBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    message: str


# -------------------------------------------------------------------
# Boundary (request / response) models
# -------------------------------------------------------------------

def sanitize_name(value: str) -> str:
    return _MARKUP_CHARS.sub("", value or "").strip()


class EvaluateRequest(BaseModel):
    name: str
    email: EmailStr
    answers: AnswerSet

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = sanitize_name(v)
        if len(v) < NAME_MIN_LENGTH:
            raise ValueError("Name too short")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError("Name too long")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return str(v).strip().lower()


class EvaluationResult(BaseModel):
    id: str
    score: int
    recommendations: List[Recommendation]


class EvaluationReport(BaseModel):
    id: str
    name: str
    score: int
    band: ScoreBand
    recommendations: List[Recommendation]
    high_priority_count: int


class CreateEvaluationResponse(BaseModel):
    success: bool = True
    data: EvaluationResult


class EvaluationListResponse(BaseModel):
    success: bool = True
    data: List[EvaluationSummary]


class EvaluationResponse(BaseModel):
    success: bool = True
    data: Evaluation


class EvaluationReportResponse(BaseModel):
    success: bool = True
    data: EvaluationReport
