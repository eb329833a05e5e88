"""
Unit tests for recommendation_rules.py

Tests cover:
- Each rule in isolation
- Fixed output order (rule order, not priority order)
- Empty output for a perfect answer set
- Purity
"""
import pytest

from core.assessment.models import AnswerSet, Recommendation
from recommendation_rules import build_recommendations


def titles(recs):
    return [r.title for r in recs]


class TestIndividualRules:

    def test_weak_password_is_high_priority(self, make_answers):
        recs = build_recommendations(make_answers(password="no"))
        assert len(recs) == 1
        assert recs[0].title == "Weak Passwords"
        assert recs[0].priority == "alta"

    def test_missing_2fa_is_high_priority(self, make_answers):
        recs = build_recommendations(make_answers(twoFactor="no"))
        assert recs == [
            Recommendation(
                title="Two-Factor Authentication",
                description="Turn on 2FA for all of your important accounts.",
                priority="alta",
            )
        ]

    @pytest.mark.parametrize("updates", ["a-veces", "nunca"])
    def test_anything_but_always_updating_is_flagged(self, make_answers, updates):
        recs = build_recommendations(make_answers(updates=updates))
        assert titles(recs) == ["Pending Updates"]
        assert recs[0].priority == "media"

    def test_public_wifi_yes_is_flagged(self, make_answers):
        recs = build_recommendations(make_answers(publicWifi="si"))
        assert titles(recs) == ["Public WiFi Networks"]
        assert recs[0].priority == "media"

    def test_public_wifi_no_is_not_flagged(self, make_answers):
        assert build_recommendations(make_answers(publicWifi="no")) == []

    def test_missing_backups_is_flagged(self, make_answers):
        recs = build_recommendations(make_answers(backup="no"))
        assert titles(recs) == ["Backups"]
        assert recs[0].priority == "media"

    def test_every_recommendation_has_description(self):
        answers = AnswerSet(
            password="no", twoFactor="no", updates="nunca", publicWifi="si", backup="no"
        )
        for rec in build_recommendations(answers):
            assert rec.description


class TestOrdering:

    def test_worst_answers_emit_all_five_in_rule_order(self):
        answers = AnswerSet(
            password="no", twoFactor="no", updates="nunca", publicWifi="si", backup="no"
        )
        recs = build_recommendations(answers)
        assert titles(recs) == [
            "Weak Passwords",
            "Two-Factor Authentication",
            "Pending Updates",
            "Public WiFi Networks",
            "Backups",
        ]
        assert [r.priority for r in recs] == ["alta", "alta", "media", "media", "media"]

    def test_media_before_alta_is_not_resorted(self, make_answers):
        """Rule order wins even when a later rule has higher priority"""
        answers = make_answers(updates="nunca", backup="no")
        assert titles(build_recommendations(answers)) == ["Pending Updates", "Backups"]


class TestPerfectAnswers:

    def test_best_answers_produce_no_recommendations(self, make_answers):
        assert build_recommendations(make_answers()) == []

    def test_is_deterministic(self, make_answers):
        answers = make_answers(password="no", publicWifi="si")
        assert build_recommendations(answers) == build_recommendations(answers)
