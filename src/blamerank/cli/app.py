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

from pathlib import Path
from typing import List, Optional
import logging

import typer

from ..domain.errors import BlameRankError, InvalidLineRange, InvalidWeight
from ..domain.models import LineRange, Weights
from ..services import OwnershipService, ReportService, parse_weights
from ..adapters.blame.git_blame import GitBlameSource

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="blamerank CLI - Rank who knows a file best from its blame history")

logger = logging.getLogger(__name__)


def _parse_weight(weight: Optional[str]) -> Weights:
    """
    Parse --weight into validated Weights.
    Raises Typer BadParameter so nothing runs on a bad value.
    """
    try:
        return parse_weights(weight)
    except InvalidWeight as e:
        raise typer.BadParameter(str(e), param_hint="--weight")


def _parse_ranges(ranges: Optional[List[str]]) -> List[LineRange]:
    try:
        return [LineRange.parse(r) for r in ranges or []]
    except InvalidLineRange as e:
        raise typer.BadParameter(str(e), param_hint="-L")


def _wire(rev: Optional[str] = None) -> tuple[OwnershipService, ReportService]:
    """
    Minimal composition root:
      GitBlameSource + OwnershipService + ReportService
    """
    source = GitBlameSource(rev=rev)
    return OwnershipService(source), ReportService()


@app.command()
def rank(
    files: List[Path] = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="File(s) to rank contributors for",
    ),
    line_range: Optional[List[str]] = typer.Option(
        None,
        "-L",
        "--line-range",
        help="Only count lines <start>-<end> (inclusive). May be repeated.",
    ),
    table: bool = typer.Option(
        True, "--table/--no-table", help="ASCII table or comma-delimited output."
    ),
    weight: Optional[str] = typer.Option(
        None,
        "--weight",
        envvar="BLAMERANK_WEIGHT",
        help="Weights <commits>,<lines>,<latest>,<earliest>. Default: 1,1,0,0",
    ),
    filter_email: Optional[List[str]] = typer.Option(
        None, "--filter-email", help="Only show authors whose email contains this. May be repeated."
    ),
    filter_name: Optional[List[str]] = typer.Option(
        None, "--filter-name", help="Only show authors whose name contains this. May be repeated."
    ),
    rev: Optional[str] = typer.Option(
        None, "--rev", help="Blame the file as of this revision instead of the work tree."
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "--output",
        help="Write the report to this path instead of stdout.",
        resolve_path=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Rank the contributors of FILES by commits, lines and recency.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    # Bad weights or ranges must fail before any blame runs.
    weights = _parse_weight(weight)
    ranges = _parse_ranges(line_range)

    ownership, report = _wire(rev)
    chunks: List[str] = []
    try:
        for path in files:
            ranked = ownership.rank_file(
                path,
                filters=ranges,
                weights=weights,
                email_filters=filter_email or (),
                name_filters=filter_name or (),
            )
            logger.debug("%s: %d authors", path, len(ranked))
            if len(files) > 1:
                chunks.append(f"File: {path}\n")
            chunks.append(report.render(ranked, table=table))
    except BlameRankError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    text = "".join(chunks)
    if out is None:
        typer.echo(text, nl=False)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {'table' if table else 'delimited'} report to {out}")