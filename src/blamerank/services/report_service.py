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

import csv
import io
from typing import Any, Dict, List, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..domain.models import AuthorAggregate

FIELDNAMES = ["name", "email", "score", "commits", "lines", "latest", "earliest"]
NUMERIC_FIELDS = {"score", "commits", "lines"}


class ReportService:
    """
    Renders a ranked author list as text.

    Notes:
      - Table (default): ASCII box table, one row per author.
      - Delimited: comma-separated with a header row; stable column order.
      - An empty ranking renders the header only.
    """

    def __init__(self, width: int = 200, precision: int = 2) -> None:
        self._width = int(width)
        self._precision = int(precision)

    def _row(self, author: AuthorAggregate) -> Dict[str, Any]:
        row = author.to_dict()
        row["score"] = f"{float(author.score or 0):.{self._precision}f}"
        return row

    def _rows(self, summaries: Sequence[AuthorAggregate]) -> List[Dict[str, Any]]:
        return [self._row(a) for a in summaries]

    def render_table(self, summaries: Sequence[AuthorAggregate]) -> str:
        table = Table(box=box.ASCII, show_edge=True)
        for name in FIELDNAMES:
            table.add_column(name, justify="right" if name in NUMERIC_FIELDS else "left")
        for row in self._rows(summaries):
            table.add_row(*(str(row[name]) for name in FIELDNAMES))

        buf = io.StringIO()
        console = Console(
            file=buf,
            width=self._width,
            color_system=None,
            force_terminal=False,
            highlight=False,
        )
        console.print(table)
        return buf.getvalue()

    def render_delimited(self, summaries: Sequence[AuthorAggregate]) -> str:
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=FIELDNAMES, lineterminator="\n")
        writer.writeheader()
        for row in self._rows(summaries):
            writer.writerow(row)
        return buf.getvalue()

    def render(self, summaries: Sequence[AuthorAggregate], table: bool = True) -> str:
        if table:
            return self.render_table(summaries)
        return self.render_delimited(summaries)
