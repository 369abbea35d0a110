# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterator, Optional

from ...domain.errors import BlameParseError
from ...domain.models import AttributionRecord

# <sha> <orig line> <final line> [<lines in group>]
HEADER_RE = re.compile(
    r"^(?P<sha>[0-9a-fA-F]{40}|[0-9a-fA-F]{64}) (?P<orig>\d+) (?P<final>\d+)(?: (?P<count>\d+))?$"
)
TZ_RE = re.compile(r"^(?P<sign>[+-])(?P<hh>\d{2})(?P<mm>\d{2})$")


def parse_tz(value: str) -> timezone:
    """Turn a git offset such as ``-0700`` into a tzinfo."""
    m = TZ_RE.match(value.strip())
    if not m:
        raise BlameParseError(f"Invalid timezone offset: {value!r}")
    delta = timedelta(hours=int(m.group("hh")), minutes=int(m.group("mm")))
    return timezone(-delta if m.group("sign") == "-" else delta)


def strip_mail(value: str) -> str:
    """``<jane@example.com>`` -> ``jane@example.com``"""
    value = value.strip()
    if value.startswith("<") and value.endswith(">"):
        return value[1:-1]
    return value


def _timestamp(sha: str, meta: Dict[str, str]) -> datetime:
    try:
        seconds = int(meta["author-time"])
    except KeyError:
        raise BlameParseError(f"Commit {sha} has no author-time") from None
    except ValueError:
        raise BlameParseError(
            f"Commit {sha} has a non-integer author-time: {meta['author-time']!r}"
        ) from None
    tz = parse_tz(meta.get("author-tz", "+0000"))
    return datetime.fromtimestamp(seconds, tz)


def parse_porcelain(text: str) -> Iterator[AttributionRecord]:
    """
    Parse ``git blame --porcelain`` output into one record per hunk.

    Commit metadata is only printed the first time a commit shows up, so it
    is cached by sha and reused for later groups of the same commit.

    Raises:
        BlameParseError: on unexpected lines, truncated entries or commits
            with missing metadata.
    """
    commits: Dict[str, Dict[str, str]] = {}
    sha: Optional[str] = None
    final = 0
    count: Optional[int] = None

    # Split on "\n" only; content lines may carry \r, \f and other breaks.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for lineno, line in enumerate(lines, start=1):
        if line.startswith("\t"):
            if sha is None:
                raise BlameParseError(f"line {lineno}: content line without a header")
            if count is not None:
                meta = commits[sha]
                yield AttributionRecord(
                    author_name=meta.get("author", ""),
                    author_email=strip_mail(meta.get("author-mail", "")),
                    commit_id=sha,
                    commit_timestamp=_timestamp(sha, meta),
                    start_line=final,
                    line_count=count,
                    summary=meta.get("summary"),
                    filename=meta.get("filename"),
                    boundary="boundary" in meta,
                )
            sha = None
            continue

        m = HEADER_RE.match(line)
        if m and sha is None:
            sha = m.group("sha")
            final = int(m.group("final"))
            count = int(m.group("count")) if m.group("count") else None
            commits.setdefault(sha, {})
            continue

        if sha is None:
            raise BlameParseError(f"line {lineno}: expected a blame header, got {line!r}")
        key, _, value = line.partition(" ")
        commits[sha][key] = value

    if sha is not None:
        raise BlameParseError("Truncated blame output: header without content line")
