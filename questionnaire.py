# questionnaire.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True)
class Question:
    id: str
    question: str
    options: Tuple[Option, ...]


QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="password",
        question="Do you use unique, strong passwords for every account?",
        options=(Option("si", "Yes, always"), Option("no", "No")),
    ),
    Question(
        id="twoFactor",
        question="Do you have two-factor authentication enabled?",
        options=(Option("si", "Yes"), Option("no", "No")),
    ),
    Question(
        id="updates",
        question="Do you regularly update your devices and applications?",
        options=(
            Option("siempre", "Always"),
            Option("a-veces", "Sometimes"),
            Option("nunca", "Never"),
        ),
    ),
    Question(
        id="publicWifi",
        question="Do you use public WiFi networks without a VPN?",
        options=(Option("si", "Yes"), Option("no", "No")),
    ),
    Question(
        id="backup",
        question="Do you back up your important data?",
        options=(Option("si", "Yes"), Option("no", "No")),
    ),
)

QUESTION_IDS: Tuple[str, ...] = tuple(q.id for q in QUESTIONS)

_BY_ID: Dict[str, Question] = {q.id: q for q in QUESTIONS}


def allowed_values(question_id: str) -> List[str]:
    """Valid answer values for one question, in display order."""
    try:
        question = _BY_ID[question_id]
    except KeyError:
        raise KeyError(f"Unknown question: {question_id}") from None
    return [o.value for o in question.options]


def catalog() -> List[Dict[str, Any]]:
    # plain dicts, served as-is by GET /api/questions
    return [asdict(q) for q in QUESTIONS]
