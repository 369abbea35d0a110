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

import math
from dataclasses import dataclass, field
from datetime import datetime
from fractions import Fraction
from typing import Any, Dict, Optional

from .errors import InvalidLineRange, InvalidWeight


@dataclass(frozen=True)
class AttributionRecord:
    """
    One blame hunk: a contiguous run of lines of the target file that were
    last touched by a single commit.
    """

    author_name: str
    author_email: str
    commit_id: str
    commit_timestamp: datetime
    start_line: int
    line_count: int
    summary: Optional[str] = None
    filename: Optional[str] = None
    boundary: bool = False

    @property
    def end_line(self) -> int:
        """Last line covered by the hunk (inclusive)."""
        return self.start_line + self.line_count - 1


@dataclass(frozen=True)
class LineRange:
    """Inclusive line filter, as given to ``-L <start>-<end>``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < self.start:
            raise InvalidLineRange(
                f"Line range {self.start}-{self.end} must satisfy 1 <= start <= end"
            )

    @classmethod
    def parse(cls, text: str) -> "LineRange":
        """Parse ``"<start>-<end>"``; a bare ``"<n>"`` selects a single line."""
        raw = (text or "").strip()
        start_s, sep, end_s = raw.partition("-")
        try:
            start = int(start_s)
            end = int(end_s) if sep else start
        except ValueError:
            raise InvalidLineRange(
                f"Invalid line range {text!r}; expected <start>-<end>"
            ) from None
        return cls(start, end)

    def overlap(self, start: int, end: int) -> int:
        """Number of lines of ``[start, end]`` inside this range."""
        return max(0, min(self.end, end) - max(self.start, start) + 1)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class AuthorAggregate:
    """Per-author statistics for one file (or one filtered view of it)."""

    name: str
    email: str
    commit_count: int
    line_count: int
    latest: datetime
    earliest: datetime
    score: Optional[Fraction] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "score": float(self.score) if self.score is not None else None,
            "commits": self.commit_count,
            "lines": self.line_count,
            "latest": self.latest.date().isoformat(),
            "earliest": self.earliest.date().isoformat(),
        }


@dataclass(frozen=True)
class Aggregation:
    """
    Result of a single aggregation pass.

    ``hunk_count`` and ``line_total`` describe the included hunks file-wide;
    the scorer uses them to make line counts dimensionless.
    """

    authors: Dict[str, AuthorAggregate] = field(default_factory=dict)
    hunk_count: int = 0
    line_total: int = 0

    @property
    def average_hunk_size(self) -> float:
        if self.hunk_count == 0:
            return 0.0
        return self.line_total / self.hunk_count


@dataclass(frozen=True)
class Weights:
    """Multipliers for the commits, lines, latest and earliest score terms."""

    commits: float = 1.0
    lines: float = 1.0
    latest: float = 0.0
    earliest: float = 0.0

    def __post_init__(self) -> None:
        for name in ("commits", "lines", "latest", "earliest"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidWeight(f"Weight {name!r} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise InvalidWeight(
                    f"Weight {name!r} must be a finite non-negative number, got {value!r}"
                )
