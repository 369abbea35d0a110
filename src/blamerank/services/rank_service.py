# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from fractions import Fraction
from typing import Iterable, List, Tuple

from ..domain.models import AuthorAggregate


def rank_key(a: AuthorAggregate) -> Tuple[Fraction, int, int, float, str]:
    """
    Sort key: score, commits, lines and latest descending, then email
    ascending. Unscored aggregates sort as score 0.
    """
    return (
        -(a.score if a.score is not None else Fraction(0)),
        -a.commit_count,
        -a.line_count,
        -a.latest.timestamp(),
        a.email,
    )


class RankService:
    """Orders scored aggregates into a deterministic total order."""

    def rank(self, authors: Iterable[AuthorAggregate]) -> List[AuthorAggregate]:
        return sorted(authors, key=rank_key)
