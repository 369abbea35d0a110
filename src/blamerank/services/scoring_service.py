# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from fractions import Fraction
from typing import List, Optional

from ..domain.errors import InvalidWeight
from ..domain.models import Aggregation, AuthorAggregate, Weights

WEIGHT_FIELDS = ("commits", "lines", "latest", "earliest")
SECONDS_PER_DAY = 86400.0


def parse_weights(text: Optional[str]) -> Weights:
    """
    Parse ``"<commits>,<lines>,<latest>,<earliest>"`` into Weights.

    ``None`` gives the defaults. One to four values are accepted; missing
    trailing values are 0.

    Raises:
        InvalidWeight: on empty fields, more than four values or non-numeric
            values; Weights itself rejects negative and non-finite ones.
    """
    if text is None:
        return Weights()
    parts = [p.strip() for p in text.split(",")]
    if len(parts) > len(WEIGHT_FIELDS):
        raise InvalidWeight(
            f"Expected at most {len(WEIGHT_FIELDS)} weights "
            f"({','.join(WEIGHT_FIELDS)}), got {len(parts)}: {text!r}"
        )
    values: List[float] = []
    for name, part in zip(WEIGHT_FIELDS, parts):
        try:
            values.append(float(part))
        except ValueError:
            raise InvalidWeight(f"Weight {name!r} is not a number: {part!r}") from None
    values += [0.0] * (len(WEIGHT_FIELDS) - len(values))
    return Weights(*values)


def days_since(ts: datetime, now: datetime) -> float:
    """Fractional days from ``ts`` to ``now``; future timestamps count as 0."""
    return max(0.0, (now - ts).total_seconds() / SECONDS_PER_DAY)


def recency(ts: datetime, now: datetime) -> float:
    """Inverse-day decay in (0, 1]: 1 for today, 0.5 a day ago, ..."""
    return 1.0 / (1.0 + days_since(ts, now))


class ScoringService:
    """
    Folds an author's aggregate into one comparable number.

    Terms:
      * commits  -> raw distinct commit count
      * lines    -> line count divided by the file-wide average hunk size
      * latest   -> 1 / (1 + days since the most recent touch)
      * earliest -> 1 / (1 + days since the first surviving touch)
    """

    def __init__(self, weights: Optional[Weights] = None, now: Optional[datetime] = None) -> None:
        self._weights = weights or Weights()
        self._now = now

    @property
    def weights(self) -> Weights:
        return self._weights

    def score(self, author: AuthorAggregate, aggregation: Aggregation) -> Fraction:
        """
        Exact weighted sum; scaling every weight by k scales the result by
        exactly k. Convert to float only for display.
        """
        w = self._weights
        now = self._now or datetime.now(timezone.utc)
        if aggregation.line_total > 0:
            lines_term = Fraction(
                author.line_count * aggregation.hunk_count, aggregation.line_total
            )
        else:
            lines_term = Fraction(0)
        return (
            Fraction(w.commits) * author.commit_count
            + Fraction(w.lines) * lines_term
            + Fraction(w.latest) * Fraction(recency(author.latest, now))
            + Fraction(w.earliest) * Fraction(recency(author.earliest, now))
        )

    def score_all(self, aggregation: Aggregation) -> List[AuthorAggregate]:
        """Return a scored copy of every aggregate in ``aggregation``."""
        return [
            dataclasses.replace(a, score=self.score(a, aggregation))
            for a in aggregation.authors.values()
        ]
