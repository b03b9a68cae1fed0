"""Group hit locations by file in a deterministic order."""

import logging
from typing import Dict, Iterable, Iterator, List

from lspnav.locations import SourceLocation

logger = logging.getLogger(__name__)


class HitSet:
    """Locations partitioned by file path.

    Arrival order is kept inside each file; ``files()`` and ``hits_for()``
    give the sorted views used for rendering.
    """

    def __init__(self) -> None:
        self._by_file: Dict[str, List[SourceLocation]] = {}
        self._seen = set()

    def add(self, location: SourceLocation) -> bool:
        """Add a location, returning False if it was already present."""
        if location in self._seen:
            return False
        self._seen.add(location)
        self._by_file.setdefault(location.file_path, []).append(location)
        return True

    def files(self) -> List[str]:
        """File paths in ascending codepoint order."""
        return sorted(self._by_file)

    def arrival(self, file_path: str) -> List[SourceLocation]:
        return list(self._by_file.get(file_path, []))

    def hits_for(self, file_path: str) -> List[SourceLocation]:
        """Locations in a file ordered by line, then column."""
        return sorted(self._by_file.get(file_path, []), key=lambda loc: (loc.start, loc.end))

    def __len__(self) -> int:
        return len(self._seen)

    def __bool__(self) -> bool:
        return bool(self._seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self.files())

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._by_file


def group(locations: Iterable[SourceLocation]) -> HitSet:
    """Partition locations by file, dropping exact duplicates."""
    hits = HitSet()
    duplicates = 0
    for location in locations:
        if not hits.add(location):
            duplicates += 1
    if duplicates:
        logger.debug(f"Dropped {duplicates} duplicate locations")
    return hits
