# recommendation_rules.py
from __future__ import annotations

from typing import List

from core.assessment.models import AnswerSet, Priority, Recommendation


def _rec(*, title: str, description: str, priority: Priority) -> Recommendation:
    return Recommendation(title=title, description=description, priority=priority)


def build_recommendations(answers: AnswerSet) -> List[Recommendation]:
    """
    Deterministic rule pass over one answer set.

    Rules run in a fixed order and the output keeps that order
    (not sorted by priority). A perfect answer set yields [].
    """
    recs: List[Recommendation] = []

    # -------------------------
    # alta: account takeover risks
    # -------------------------
    if answers.password != "si":
        recs.append(_rec(
            title="Weak Passwords",
            description="Use a unique, strong password for every account.",
            priority="alta",
        ))

    if answers.twoFactor != "si":
        recs.append(_rec(
            title="Two-Factor Authentication",
            description="Turn on 2FA for all of your important accounts.",
            priority="alta",
        ))

    # -------------------------
    # media: hygiene
    # -------------------------
    if answers.updates != "siempre":
        recs.append(_rec(
            title="Pending Updates",
            description="Keep your system and applications up to date at all times.",
            priority="media",
        ))

    if answers.publicWifi == "si":
        recs.append(_rec(
            title="Public WiFi Networks",
            description="Avoid public WiFi or use a VPN to protect your data.",
            priority="media",
        ))

    if answers.backup != "si":
        recs.append(_rec(
            title="Backups",
            description="Back up your important information regularly.",
            priority="media",
        ))

    return recs
