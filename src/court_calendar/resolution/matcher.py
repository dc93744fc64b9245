"""Name matching used by the resolver.

Matching is kept behind ``NameMatcher`` so the substring heuristic can be
replaced (edit distance, token overlap) without touching the resolver.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

# (labels, value): a candidate matches when any of its labels matches
Candidate = Tuple[Sequence[str], Any]


class NameMatcher(Protocol):
    def match(self, name: str, candidates: Sequence[Candidate]) -> Optional[Any]:
        ...


class SubstringNameMatcher:
    """Exact case-insensitive match first, then two-way substring containment.

    Collisions resolve to the first candidate in the order given and are
    logged for review, since short names can hit several registry entries.
    """

    def match(self, name: str, candidates: Sequence[Candidate]) -> Optional[Any]:
        query = (name or '').strip().lower()
        if not query:
            return None
        prepared: List[Tuple[List[str], Any]] = [
            ([lbl.strip().lower() for lbl in labels if lbl and lbl.strip()], value)
            for labels, value in candidates
        ]

        for labels, value in prepared:
            if query in labels:
                return value

        hits = [value for labels, value in prepared
                if any(lbl in query or query in lbl for lbl in labels)]
        if not hits:
            return None
        distinct = list(dict.fromkeys(hits))
        if len(distinct) > 1:
            logger.warning(f"Ambiguous name match for '{name}': {distinct}; using '{distinct[0]}'")
        return hits[0]


__all__ = ['Candidate', 'NameMatcher', 'SubstringNameMatcher']
