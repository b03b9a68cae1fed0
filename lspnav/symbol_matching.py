"""Decide which fuzzy workspace-symbol results genuinely match a query.

workspace/symbol may return a large number of fuzzy matches, and indexers
disagree on whether methods are named ``method``, ``Type.method`` or
``Type::method``. The matcher accepts both conventions so callers do not need
to know which one the server uses.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from lspnav.locations import SymbolCandidate

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = (".", "::")


class SymbolMatcher:
    """Name/kind aware matching policy for symbol candidates.

    Rules for a query without ``.``:
        - non-method candidates match on exact name only
        - method candidates match on exact name, or when the name ends with a
          separator followed by the query (``Type.Foo``, ``Type::Foo``)

    Rules for a qualified query such as ``Type.Foo``:
        - exact qualified name, or
        - the bare method name ``Foo`` for indexers that only expose that

    Example:
        >>> matcher = SymbolMatcher()
        >>> [c.name for c in matcher.match("Foo", candidates)]
        ['Foo', 'Type::Foo']
    """

    def __init__(self, separators: Optional[Sequence[str]] = None):
        self.separators = tuple(separators) if separators else DEFAULT_SEPARATORS
        pattern = "|".join(re.escape(sep) for sep in sorted(self.separators, key=len, reverse=True))
        self._split_re = re.compile(pattern)

    def matches(self, query: str, candidate: SymbolCandidate) -> bool:
        name = candidate.name
        if "." not in query:
            if candidate.is_method:
                return name == query or any(name.endswith(sep + query) for sep in self.separators)
            return name == query

        method_name = query.split(".")[-1]
        return name == query or name == method_name

    def match(self, query: str, candidates: Iterable[SymbolCandidate]) -> List[SymbolCandidate]:
        """Filter candidates, keeping index order."""
        accepted = [candidate for candidate in candidates if self.matches(query, candidate)]
        logger.debug(f"Matched {len(accepted)} symbols for '{query}'")
        return accepted

    def match_definitions(self, query: str, candidates: Iterable[SymbolCandidate]) -> List[SymbolCandidate]:
        """Match for definition lookups.

        Same policy as ``match`` plus a pass for methods: when a qualified
        query was only satisfied by a method's bare name, the method's
        container must agree with the query's qualifier (if the index reports
        a container at all).
        """
        accepted = self.match(query, candidates)
        if "." not in query:
            return accepted

        parts = query.split(".")
        method_name = parts[-1]
        qualifier = parts[-2] if len(parts) > 1 else ""

        kept = []
        for candidate in accepted:
            if (
                candidate.is_method
                and candidate.name != query
                and candidate.name == method_name
                and candidate.container_name
                and self.last_segment(candidate.container_name) != qualifier
            ):
                logger.debug(
                    f"Skipping {candidate.container_name}.{candidate.name}: "
                    f"container does not match '{qualifier}'"
                )
                continue
            kept.append(candidate)
        return kept

    def last_segment(self, name: str) -> str:
        """Last component of a qualified name, split on any separator."""
        return self._split_re.split(name)[-1]
