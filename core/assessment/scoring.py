from __future__ import annotations

import math
from typing import Dict, Mapping, Union

from core.assessment.models import AnswerSet, ScoreBand


POINTS_PER_QUESTION = 10

# Anything not listed ("no", "nunca") is worth nothing.
ANSWER_POINTS: Dict[str, int] = {
    "si": 10,
    "siempre": 10,
    "a-veces": 5,
}

# "Do you use public WiFi without a VPN?" is the one question where "si" is the risky answer.
RISK_QUESTIONS = ("publicWifi",)


SCORE_BANDS = [
    (80, 100, ScoreBand(
        label="Excellent",
        message="Excellent! Your digital security is in very good shape.",
    )),
    (50, 79, ScoreBand(
        label="Fair",
        message="Good, but there are areas to improve.",
    )),
    (0, 49, ScoreBand(
        label="At Risk",
        message="Warning: your digital security needs urgent improvements.",
    )),
]


def _as_mapping(answers: Union[AnswerSet, Mapping[str, str]]) -> Mapping[str, str]:
    if isinstance(answers, AnswerSet):
        return answers.model_dump()
    return answers


def answer_points(question_id: str, value: str, *, risk_aware_wifi: bool = False) -> int:
    if risk_aware_wifi and question_id in RISK_QUESTIONS:
        return POINTS_PER_QUESTION if value == "no" else 0
    return ANSWER_POINTS.get(value, 0)


def calculate_score(
    answers: Union[AnswerSet, Mapping[str, str]],
    *,
    risk_aware_wifi: bool = False,
) -> int:
    """
    Weighted sum over every answered question, each capped at 10 points,
    scaled to 0..100 and rounded half up.

    By default publicWifi == "si" earns full points even though the
    recommendation rules flag it as risky. risk_aware_wifi=True scores
    that question by its safe answer ("no") instead.
    """
    items = _as_mapping(answers)
    max_score = len(items) * POINTS_PER_QUESTION
    if max_score == 0:
        return 0

    total = sum(
        answer_points(qid, value, risk_aware_wifi=risk_aware_wifi)
        for qid, value in items.items()
    )
    return int(math.floor(total / max_score * 100 + 0.5))


def interpret(score: int) -> ScoreBand:
    for lo, hi, band in SCORE_BANDS:
        if lo <= score <= hi:
            return band
    # fallback
    return SCORE_BANDS[-1][2]
