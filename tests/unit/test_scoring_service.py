# tests/unit/test_scoring_service.py
from datetime import datetime, timedelta, timezone
from fractions import Fraction

import pytest

from blamerank.domain import AttributionRecord, InvalidWeight, Weights
from blamerank.services.aggregate_service import AggregateService
from blamerank.services.scoring_service import (
    ScoringService,
    days_since,
    parse_weights,
    recency,
)

NOW = datetime(2021, 1, 1, tzinfo=timezone.utc)


def _ts(y, m, d):
    return datetime(y, m, d, 12, tzinfo=timezone.utc)


def scenario_a_aggregation():
    return AggregateService().aggregate(
        [
            AttributionRecord("Alice", "alice@example.com", "c1", _ts(2020, 4, 10), 1, 10),
            AttributionRecord("Alice", "alice@example.com", "c2", _ts(2019, 2, 1), 11, 2),
            AttributionRecord("Bob", "bob@example.com", "c3", _ts(2019, 1, 1), 13, 12),
        ]
    )


def test_parse_weights_defaults_when_absent():
    assert parse_weights(None) == Weights(1, 1, 0, 0)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0,1,0,0", Weights(0, 1, 0, 0)),
        ("2.5, 0.5, 1, 3", Weights(2.5, 0.5, 1, 3)),
        ("2", Weights(2, 0, 0, 0)),
        ("1,2", Weights(1, 2, 0, 0)),
        ("1e1,0,0,0", Weights(10, 0, 0, 0)),
    ],
)
def test_parse_weights_valid(text, expected):
    assert parse_weights(text) == expected


@pytest.mark.parametrize(
    "text", ["1,-1,0,0", "1,1,0,0,0", "a,1", "", "1,,1", "nan", "1,inf"]
)
def test_parse_weights_invalid(text):
    with pytest.raises(InvalidWeight):
        parse_weights(text)


def test_days_since_and_recency():
    assert days_since(NOW - timedelta(days=3), NOW) == pytest.approx(3.0)
    assert days_since(NOW + timedelta(days=3), NOW) == 0.0
    assert recency(NOW, NOW) == 1.0
    assert recency(NOW - timedelta(days=1), NOW) == pytest.approx(0.5)
    assert 0 < recency(NOW - timedelta(days=10_000), NOW) < 0.001


def test_scenario_a_default_scores():
    agg = scenario_a_aggregation()
    scored = {a.email: a.score for a in ScoringService(now=NOW).score_all(agg)}
    # average hunk size is 24 / 3 = 8 lines
    assert scored["alice@example.com"] == pytest.approx(2 + 12 / 8)
    assert scored["bob@example.com"] == pytest.approx(1 + 12 / 8)


def test_recency_terms_favour_recent_activity():
    agg = scenario_a_aggregation()
    svc = ScoringService(Weights(0, 0, 1, 0), now=NOW)
    alice = svc.score(agg.authors["alice@example.com"], agg)
    bob = svc.score(agg.authors["bob@example.com"], agg)
    assert 0 < bob < alice <= 1

    days = (NOW - _ts(2020, 4, 10)).total_seconds() / 86400
    assert alice == pytest.approx(1 / (1 + days))


def test_earliest_term_uses_first_touch():
    agg = scenario_a_aggregation()
    svc = ScoringService(Weights(0, 0, 0, 1), now=NOW)
    days = (NOW - _ts(2019, 2, 1)).total_seconds() / 86400
    assert svc.score(agg.authors["alice@example.com"], agg) == pytest.approx(1 / (1 + days))


def test_zero_line_weight_ignores_line_counts():
    agg = AggregateService().aggregate(
        [
            AttributionRecord("A", "a@example.com", "c1", _ts(2020, 1, 1), 1, 1),
            AttributionRecord("B", "b@example.com", "c2", _ts(2020, 1, 1), 2, 50),
        ]
    )
    svc = ScoringService(Weights(1, 0, 0, 0), now=NOW)
    assert svc.score(agg.authors["a@example.com"], agg) == svc.score(agg.authors["b@example.com"], agg)


def test_score_all_leaves_input_unscored():
    agg = scenario_a_aggregation()
    scored = ScoringService(now=NOW).score_all(agg)
    assert all(a.score is not None for a in scored)
    assert all(a.score is None for a in agg.authors.values())


def test_negative_weight_is_rejected_by_weights():
    with pytest.raises(InvalidWeight, match="non-negative"):
        parse_weights("1,-1,0,0")


def test_scores_are_exact_and_scale_exactly():
    agg = scenario_a_aggregation()
    alice = agg.authors["alice@example.com"]

    plain = ScoringService(now=NOW).score(alice, agg)
    assert plain == Fraction(7, 2)
    assert isinstance(plain, Fraction)
    assert ScoringService(Weights(0.1, 0.1, 0, 0), now=NOW).score(alice, agg) == Fraction(0.1) * plain
