# tests/services/test_ownership_service.py
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List

import pytest

from blamerank.domain import AttributionRecord, InvalidRecord, LineRange, Weights
from blamerank.ports.blame_source import BlameSourcePort
from blamerank.services.ownership_service import OwnershipService, rank_records

NOW = datetime(2021, 1, 1, tzinfo=timezone.utc)


def _ts(y, m, d):
    return datetime(y, m, d, 12, tzinfo=timezone.utc)


SCENARIO_A = [
    AttributionRecord("Alice", "alice@example.com", "c1", _ts(2020, 4, 10), 1, 10),
    AttributionRecord("Alice", "alice@example.com", "c2", _ts(2019, 2, 1), 11, 2),
    AttributionRecord("Bob", "bob@example.com", "c3", _ts(2019, 1, 1), 13, 12),
]


class StaticSource(BlameSourcePort):
    def __init__(self, records: List[AttributionRecord]):
        self._records = records
        self.seen: List[Path] = []

    @property
    def name(self) -> str:
        return "static"

    def records(self, path: Path) -> Iterator[AttributionRecord]:
        self.seen.append(path)
        return iter(self._records)


def test_rank_file_runs_full_pipeline():
    source = StaticSource(SCENARIO_A)
    ranked = OwnershipService(source).rank_file(Path("notes.txt"), now=NOW)

    assert source.seen == [Path("notes.txt")]
    assert [(a.email, a.commit_count, a.line_count) for a in ranked] == [
        ("alice@example.com", 2, 12),
        ("bob@example.com", 1, 12),
    ]


def test_rank_file_with_line_filter():
    ranked = OwnershipService(StaticSource(SCENARIO_A)).rank_file(
        Path("notes.txt"), filters=[LineRange(1, 5)], now=NOW
    )
    assert [(a.email, a.line_count) for a in ranked] == [("alice@example.com", 5)]


def test_no_history_is_an_empty_ranking():
    assert OwnershipService(StaticSource([])).rank_file(Path("empty.txt")) == []
    assert rank_records([]) == []


def test_invalid_record_propagates():
    bad = SCENARIO_A + [AttributionRecord("Eve", "eve@example.com", "c9", _ts(2020, 1, 1), 30, 0)]
    with pytest.raises(InvalidRecord):
        OwnershipService(StaticSource(bad)).rank_file(Path("notes.txt"))


def test_email_and_name_filters_hide_authors_after_scoring():
    svc = OwnershipService(StaticSource(SCENARIO_A))
    by_email = svc.rank_file(Path("n"), now=NOW, email_filters=["bob@"])
    assert [a.email for a in by_email] == ["bob@example.com"]
    # score is unaffected by hiding alice
    assert by_email[0].score == pytest.approx(1 + 12 / 8)

    by_name = svc.rank_file(Path("n"), now=NOW, name_filters=["Ali", "Zed"])
    assert [a.name for a in by_name] == ["Alice"]


def test_identity_function_is_passed_through():
    records = [
        AttributionRecord("Alice", "alice@example.com", "c1", _ts(2020, 1, 1), 1, 1),
        AttributionRecord("Alice", "ALICE@example.com", "c2", _ts(2020, 1, 2), 2, 1),
    ]
    svc = OwnershipService(StaticSource(records), identity=lambda r: r.author_email.lower())
    ranked = svc.rank_file(Path("n"), weights=Weights(1, 0, 0, 0), now=NOW)
    assert len(ranked) == 1
    assert ranked[0].commit_count == 2
