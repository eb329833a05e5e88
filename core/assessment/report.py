from __future__ import annotations

from core.assessment.models import Evaluation, EvaluationReport
from core.assessment.scoring import interpret


def generate_client_report(evaluation: Evaluation) -> EvaluationReport:
    recs = list(evaluation.recommendations)
    return EvaluationReport(
        id=evaluation.id,
        name=evaluation.name,
        score=evaluation.score,
        band=interpret(evaluation.score),
        recommendations=recs,
        high_priority_count=sum(1 for r in recs if r.priority == "alta"),
    )
