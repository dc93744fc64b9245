"""Resolution of extracted parts, judges and clerks against the registry.

Every lookup is total: a miss returns "" (or the input name for the
canonical-name lookups) and a missing or empty cache behaves like a miss.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from court_calendar.extraction.schemas import ExtractedSession
from court_calendar.registry.cache import RegistryCache
from court_calendar.resolution.matcher import NameMatcher, SubstringNameMatcher

logger = logging.getLogger(__name__)

PART_WORD_RE = re.compile(r'part', re.IGNORECASE)
ALIAS_SPLIT_RE = re.compile(r'\s*/\s*')

CONFIDENCE_CAP = 0.95
ROOM_AND_JUDGE_BONUS = 0.15
ROOM_ONLY_BONUS = 0.10

JUDGE_ROLES = ('judge', 'justice')
CLERK_ROLES = ('clerk',)

default_matcher: NameMatcher = SubstringNameMatcher()


def resolve_room_from_part(part_label: str, cache: Optional[RegistryCache]) -> str:
    if cache is None:
        return ''
    clean = PART_WORD_RE.sub('', part_label or '', count=1).strip()
    room = cache.part_to_room.get(clean, '') if clean else ''
    if room:
        logger.debug(f"Found room {room} for part {clean}")
    return room


def resolve_room_from_judge(judge_name: str, cache: Optional[RegistryCache],
                            matcher: Optional[NameMatcher] = None) -> str:
    if cache is None:
        return ''
    candidates = [([judge], room) for judge, room in cache.judge_to_room.items()]
    return (matcher or default_matcher).match(judge_name, candidates) or ''


def _canonical_name(name: str, cache: Optional[RegistryCache], roles: Iterable[str],
                    matcher: Optional[NameMatcher]) -> str:
    if cache is None:
        return name
    roles = tuple(roles)
    candidates = [([p.display_name, p.full_name], p.preferred_name)
                  for p in cache.personnel if p.has_role(*roles) and p.preferred_name]
    return (matcher or default_matcher).match(name, candidates) or name


def resolve_canonical_judge_name(name: str, cache: Optional[RegistryCache],
                                 matcher: Optional[NameMatcher] = None) -> str:
    return _canonical_name(name, cache, JUDGE_ROLES, matcher)


def resolve_canonical_clerk_name(name: str, cache: Optional[RegistryCache],
                                 matcher: Optional[NameMatcher] = None) -> str:
    return _canonical_name(name, cache, CLERK_ROLES, matcher)


def judge_for_room(room_number: str, cache: Optional[RegistryCache]) -> str:
    if cache is None:
        return ''
    assignment = cache.assignment_for_room(room_number)
    return assignment.justice if assignment else ''


def clerk_for_room(room_number: str, cache: Optional[RegistryCache]) -> str:
    if cache is None:
        return ''
    assignment = cache.assignment_for_room(room_number)
    if not assignment or not assignment.clerks:
        return ''
    return assignment.clerks[0]


def adjust_confidence(confidence: float, room_number: Optional[str], judge_name: Optional[str]) -> float:
    """Raise confidence for resolved room (+0.10) or room and judge (+0.15), capped at 0.95."""
    if room_number and judge_name:
        bonus = ROOM_AND_JUDGE_BONUS
    elif room_number:
        bonus = ROOM_ONLY_BONUS
    else:
        return confidence
    return max(confidence, min(confidence + bonus, CONFIDENCE_CAP))


def _room_for_session(session: ExtractedSession, cache: RegistryCache, matcher: Optional[NameMatcher]) -> str:
    room = resolve_room_from_part(session.part_number, cache)
    if room:
        return room
    aliases = [a for a in ALIAS_SPLIT_RE.split(session.part_number or '') if a]
    if len(aliases) > 1:
        for alias in aliases:
            room = resolve_room_from_part(alias, cache)
            if room:
                return room
    if session.judge_name:
        return resolve_room_from_judge(session.judge_name, cache, matcher)
    return ''


def enrich_session(session: ExtractedSession, cache: Optional[RegistryCache],
                   matcher: Optional[NameMatcher] = None) -> ExtractedSession:
    """Fill room, judge and clerk from the registry and apply the confidence policy once."""
    enriched = session.model_copy(deep=True)
    if cache is None:
        return enriched

    if not enriched.room_number:
        enriched.room_number = _room_for_session(enriched, cache, matcher)

    if enriched.judge_name:
        enriched.judge_name = resolve_canonical_judge_name(enriched.judge_name, cache, matcher)
    elif enriched.room_number:
        enriched.judge_name = judge_for_room(enriched.room_number, cache)

    if enriched.clerk_name:
        enriched.clerk_name = resolve_canonical_clerk_name(enriched.clerk_name, cache, matcher)
    elif enriched.room_number:
        enriched.clerk_name = clerk_for_room(enriched.room_number, cache)

    enriched.confidence = adjust_confidence(session.confidence, enriched.room_number, enriched.judge_name)
    logger.info(f"Part {session.part_number}: Room={enriched.room_number}, "
                f"Judge={enriched.judge_name}, Clerk={enriched.clerk_name}")
    return enriched


def enrich_sessions(sessions: Iterable[ExtractedSession], cache: Optional[RegistryCache],
                    matcher: Optional[NameMatcher] = None) -> List[ExtractedSession]:
    sessions = list(sessions)
    logger.info(f"Enriching {len(sessions)} sessions with registry data")
    return [enrich_session(s, cache, matcher) for s in sessions]


__all__ = [
    'CONFIDENCE_CAP', 'default_matcher',
    'resolve_room_from_part', 'resolve_room_from_judge',
    'resolve_canonical_judge_name', 'resolve_canonical_clerk_name',
    'judge_for_room', 'clerk_for_room', 'adjust_confidence',
    'enrich_session', 'enrich_sessions',
]
