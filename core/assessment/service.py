from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from core.assessment.builder import build_evaluation
from core.assessment.errors import EvaluationNotFound, StoreError
from core.assessment.events import (
    EVALUATION_CREATED,
    NOT_FOUND,
    STORE_ERROR,
    log_security_event,
)
from core.assessment.models import (
    Evaluation,
    EvaluationReport,
    EvaluationResult,
    EvaluationSummary,
    EvaluateRequest,
)
from core.assessment.report import generate_client_report
from core.assessment.scoring import calculate_score
from core.assessment.store import EvaluationStore
from recommendation_rules import build_recommendations


class EvaluationService:
    """
    score -> recommend -> build -> save for creation; straight store reads otherwise.

    The request is validated before it gets here (EvaluateRequest), so a
    failed validation never reaches the store. A score is only returned
    once the record has been persisted.
    """

    def __init__(self, store: EvaluationStore, *, risk_aware_wifi: bool = False):
        self.store = store
        self.risk_aware_wifi = risk_aware_wifi

    def create_evaluation(
        self,
        request: EvaluateRequest,
        *,
        now: Optional[datetime] = None,
    ) -> EvaluationResult:
        answers = request.answers
        score = calculate_score(answers, risk_aware_wifi=self.risk_aware_wifi)
        recommendations = build_recommendations(answers)

        evaluation = build_evaluation(
            name=request.name,
            email=str(request.email),
            answers=answers,
            score=score,
            recommendations=recommendations,
            now=now,
            scoring_mode="risk_aware_wifi" if self.risk_aware_wifi else "as_answered",
        )

        try:
            self.store.save(evaluation)
        except StoreError as e:
            log_security_event(STORE_ERROR, operation="save", detail=e.detail)
            raise

        log_security_event(EVALUATION_CREATED, id=evaluation.id, score=score)
        return EvaluationResult(
            id=evaluation.id,
            score=evaluation.score,
            recommendations=list(evaluation.recommendations),
        )

    def list_evaluations(self) -> List[EvaluationSummary]:
        try:
            return self.store.list()
        except StoreError as e:
            log_security_event(STORE_ERROR, operation="list", detail=e.detail)
            raise

    def get_evaluation(self, evaluation_id: str) -> Evaluation:
        try:
            return self.store.get(evaluation_id)
        except EvaluationNotFound:
            log_security_event(NOT_FOUND, id=evaluation_id)
            raise
        except StoreError as e:
            log_security_event(STORE_ERROR, operation="get", id=evaluation_id, detail=e.detail)
            raise

    def get_report(self, evaluation_id: str) -> EvaluationReport:
        return generate_client_report(self.get_evaluation(evaluation_id))
