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

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from ..domain.errors import EmptyInput, InvalidRecord
from ..domain.models import Aggregation, AttributionRecord, AuthorAggregate, LineRange

logger = logging.getLogger(__name__)

IdentityFn = Callable[[AttributionRecord], str]


def email_identity(record: AttributionRecord) -> str:
    """Default author key: the exact (case-sensitive) email."""
    return record.author_email


def merge_ranges(filters: Iterable[LineRange]) -> List[LineRange]:
    """Sort and coalesce overlapping or adjacent ranges."""
    merged: List[LineRange] = []
    for r in sorted(filters, key=lambda r: (r.start, r.end)):
        if merged and r.start <= merged[-1].end + 1:
            last = merged[-1]
            merged[-1] = LineRange(last.start, max(last.end, r.end))
        else:
            merged.append(r)
    return merged


@dataclass
class _Tally:
    name: str
    email: str
    name_seen_at: datetime
    latest: datetime
    earliest: datetime
    commits: Set[str] = field(default_factory=set)
    lines: int = 0

    def add(self, record: AttributionRecord, lines: int) -> None:
        ts = record.commit_timestamp
        self.commits.add(record.commit_id)
        self.lines += lines
        if ts > self.latest:
            self.latest = ts
        if ts < self.earliest:
            self.earliest = ts
        if ts >= self.name_seen_at:
            self.name = record.author_name
            self.name_seen_at = ts

    def freeze(self) -> AuthorAggregate:
        return AuthorAggregate(
            name=self.name,
            email=self.email,
            commit_count=len(self.commits),
            line_count=self.lines,
            latest=self.latest,
            earliest=self.earliest,
        )


class AggregateService:
    """
    Groups attribution records by author.

    Notes:
      * Stateless: every call builds and owns its own map, so one instance
        may be shared freely.
      * The author key defaults to the email; pass ``identity`` to plug in
        a normalisation (e.g. a mailmap lookup).
    """

    def __init__(self, identity: Optional[IdentityFn] = None) -> None:
        self._identity = identity or email_identity

    @staticmethod
    def _validate(record: AttributionRecord) -> None:
        if record.line_count <= 0:
            raise InvalidRecord(
                f"Record for commit {record.commit_id} has line_count={record.line_count}"
            )
        if record.start_line < 1:
            raise InvalidRecord(
                f"Record for commit {record.commit_id} has start_line={record.start_line}"
            )

    @staticmethod
    def _contribution(record: AttributionRecord, filters: Sequence[LineRange]) -> int:
        if not filters:
            return record.line_count
        return sum(f.overlap(record.start_line, record.end_line) for f in filters)

    def aggregate(
        self,
        records: Iterable[AttributionRecord],
        filters: Optional[Iterable[LineRange]] = None,
    ) -> Aggregation:
        """
        Aggregate ``records`` into per-author statistics.

        Raises:
            EmptyInput: if ``records`` is empty.
            InvalidRecord: if any record has a non-positive line count or
                start line. Raised before any aggregate is returned.
        """
        records = list(records)
        if not records:
            raise EmptyInput("No attribution records supplied")
        for record in records:
            self._validate(record)

        ranges = merge_ranges(filters or ())
        tallies: Dict[str, _Tally] = {}
        hunks = 0
        total = 0

        for record in records:
            lines = self._contribution(record, ranges)
            if lines == 0:
                continue
            key = self._identity(record)
            tally = tallies.get(key)
            if tally is None:
                tally = tallies[key] = _Tally(
                    name=record.author_name,
                    email=record.author_email,
                    name_seen_at=record.commit_timestamp,
                    latest=record.commit_timestamp,
                    earliest=record.commit_timestamp,
                )
            tally.add(record, lines)
            hunks += 1
            total += lines

        logger.debug(
            "Aggregated %d of %d hunks into %d authors (%d lines)",
            hunks,
            len(records),
            len(tallies),
            total,
        )
        return Aggregation(
            authors={key: t.freeze() for key, t in tallies.items()},
            hunk_count=hunks,
            line_total=total,
        )
