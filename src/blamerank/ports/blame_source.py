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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from ..domain.models import AttributionRecord


class BlameSourcePort(ABC):
    """Abstract interface for per-hunk line attribution of a file."""

    @abstractmethod
    def records(self, path: Path) -> Iterator[AttributionRecord]:
        """Yield one record per blame hunk of the file at ``path``."""
        raise NotImplementedError

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the attribution source."""
        raise NotImplementedError
