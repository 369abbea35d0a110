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
from pathlib import Path
from typing import Iterator, Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from ...domain.errors import BlameSourceError
from ...domain.models import AttributionRecord
from ...ports.blame_source import BlameSourcePort
from .porcelain import parse_porcelain

logger = logging.getLogger(__name__)


class GitBlameSource(BlameSourcePort):
    """
    Runs ``git blame --porcelain`` for a file through GitPython.

    The repository is discovered from the file's location (parent
    directories are searched), so any path inside a work tree works.
    """

    def __init__(self, rev: Optional[str] = None) -> None:
        self._rev = rev

    @property
    def name(self) -> str:
        return "git-blame"

    def _open_repo(self, path: Path) -> Repo:
        try:
            return Repo(path.parent, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise BlameSourceError(f"Not inside a git repository: {path}") from e

    def blame_text(self, path: Path) -> str:
        path = Path(path).resolve()
        if not path.is_file():
            raise BlameSourceError(f"No such file: {path}")

        repo = self._open_repo(path)
        if repo.working_tree_dir is None:
            raise BlameSourceError(f"Repository has no work tree: {repo.git_dir}")
        workdir = Path(repo.working_tree_dir).resolve()
        try:
            rel = path.relative_to(workdir)
        except ValueError as e:
            raise BlameSourceError(f"{path} is outside of {workdir}") from e

        args = ["--porcelain"]
        if self._rev:
            args.append(self._rev)
        args += ["--", rel.as_posix()]
        logger.debug("git blame %s (in %s)", " ".join(args), workdir)
        try:
            return repo.git.blame(*args)
        except GitCommandError as e:
            raise BlameSourceError(f"git blame failed for {path}: {e}") from e
        finally:
            repo.close()

    def records(self, path: Path) -> Iterator[AttributionRecord]:
        return parse_porcelain(self.blame_text(path))
