from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from core.assessment.models import AnswerSet, Evaluation, Recommendation, ScoringMode


def new_evaluation_id(now: Optional[datetime] = None) -> str:
    """
    <epoch millis>-<12 random hex chars>.

    The millisecond prefix keeps ids in creation order when sorted by name;
    the uuid4 suffix keeps same-millisecond creates from colliding.
    """
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{millis:013d}-{uuid.uuid4().hex[:12]}"


def build_evaluation(
    *,
    name: str,
    email: str,
    answers: AnswerSet,
    score: int,
    recommendations: Sequence[Recommendation],
    now: Optional[datetime] = None,
    id_factory: Callable[[datetime], str] = new_evaluation_id,
    scoring_mode: ScoringMode = "as_answered",
) -> Evaluation:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        # naive instants are taken as UTC
        now = now.replace(tzinfo=timezone.utc)
    return Evaluation(
        id=id_factory(now),
        timestamp=now,
        name=name,
        email=email,
        score=score,
        recommendations=tuple(recommendations),
        answers=answers,
        scoring_mode=scoring_mode,
    )
