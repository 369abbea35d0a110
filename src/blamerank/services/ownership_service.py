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
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..domain.errors import EmptyInput
from ..domain.models import AttributionRecord, AuthorAggregate, LineRange, Weights
from ..ports.blame_source import BlameSourcePort
from .aggregate_service import AggregateService, IdentityFn
from .rank_service import RankService
from .scoring_service import ScoringService

logger = logging.getLogger(__name__)


def rank_records(
    records: Iterable[AttributionRecord],
    filters: Optional[Iterable[LineRange]] = None,
    weights: Optional[Weights] = None,
    now: Optional[datetime] = None,
    identity: Optional[IdentityFn] = None,
) -> List[AuthorAggregate]:
    """
    Pure pipeline: records -> aggregates -> scores -> ranked list.

    A file with no history yields ``[]``; InvalidRecord propagates.
    """
    try:
        aggregation = AggregateService(identity).aggregate(records, filters)
    except EmptyInput:
        logger.debug("No attribution records; returning an empty ranking")
        return []
    scored = ScoringService(weights, now=now).score_all(aggregation)
    return RankService().rank(scored)


def _matches(value: str, needles: Sequence[str]) -> bool:
    return not needles or any(n in value for n in needles)


class OwnershipService:
    """
    Answers "who knows this file?" for files served by a blame source.

    Notes:
      * Weights should be parsed before calling so that a bad weight string
        fails before any blame is run.
      * Email/name filters only hide authors from the result; scores are
        computed over everyone.
    """

    def __init__(self, source: BlameSourcePort, identity: Optional[IdentityFn] = None) -> None:
        self._source = source
        self._identity = identity

    def rank_file(
        self,
        path: Path,
        *,
        filters: Optional[Iterable[LineRange]] = None,
        weights: Optional[Weights] = None,
        now: Optional[datetime] = None,
        email_filters: Sequence[str] = (),
        name_filters: Sequence[str] = (),
    ) -> List[AuthorAggregate]:
        records = list(self._source.records(Path(path)))
        logger.debug("%s: %d hunks from %s", path, len(records), self._source.name)
        ranked = rank_records(records, filters, weights, now=now, identity=self._identity)
        return [
            a
            for a in ranked
            if _matches(a.email, email_filters) and _matches(a.name, name_filters)
        ]
