"""Indexed snapshot of the court registry used for enrichment.

A RegistryCache is a pure function of the rooms, personnel and assignments
it was built from. RegistryStore owns the current snapshot and swaps it on
reload; nothing invalidates it automatically when the registry changes.
"""
from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from court_calendar.errors import RegistryUnavailable
from court_calendar.registry.schemas import Assignment, PersonnelProfile, Room

logger = logging.getLogger(__name__)

PART_PATTERN = re.compile(r'part\s*(\d+)', re.IGNORECASE)

M = TypeVar('M', bound=BaseModel)


def _valid_rows(model: Type[M], rows: Iterable[Any], name: str) -> List[M]:
    """Validate rows one by one, skipping (and logging) malformed ones."""
    out: List[M] = []
    for raw in rows or []:
        if isinstance(raw, model):
            out.append(raw)
            continue
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"[registry] Skipping malformed {name} row {raw!r}: {e.error_count()} error(s)")
    return out


@dataclass
class RegistryCache:
    rooms: Dict[str, Room] = field(default_factory=dict)
    part_to_room: Dict[str, str] = field(default_factory=dict)
    judge_to_room: Dict[str, str] = field(default_factory=dict)
    personnel: List[PersonnelProfile] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)
    building: str = ""
    loaded_at: Optional[str] = None

    @classmethod
    def build(
        cls,
        rooms: Iterable[Any],
        personnel: Iterable[Any] = (),
        assignments: Iterable[Any] = (),
        building: str = "",
    ) -> "RegistryCache":
        room_map: Dict[str, Room] = {}
        part_map: Dict[str, str] = {}
        for raw in rooms or []:
            try:
                room = raw if isinstance(raw, Room) else Room.model_validate(raw)
            except ValidationError as e:
                logger.error(f"[registry] Malformed court room row {raw!r}: {e}")
                raise RegistryUnavailable() from e
            room_map[room.room_number] = room
            m = PART_PATTERN.search(room.courtroom_number)
            if m:
                part_map[m.group(1)] = room.room_number

        people = _valid_rows(PersonnelProfile, personnel, 'personnel')
        assigns = _valid_rows(Assignment, assignments, 'assignments')

        # First room per room_id, in room-map order
        by_room_id: Dict[str, Room] = {}
        for room in room_map.values():
            if room.room_id and room.room_id not in by_room_id:
                by_room_id[room.room_id] = room

        judge_map: Dict[str, str] = {}
        for a in assigns:
            if not a.justice or not a.room_id:
                continue
            room = by_room_id.get(a.room_id)
            if room:
                judge_map[a.justice.lower()] = room.room_number

        return cls(
            rooms=room_map,
            part_to_room=part_map,
            judge_to_room=judge_map,
            personnel=people,
            assignments=assigns,
            building=building,
            loaded_at=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        )

    @classmethod
    def empty(cls) -> "RegistryCache":
        return cls()

    def room(self, room_number: str) -> Optional[Room]:
        return self.rooms.get(room_number)

    def assignment_for_room(self, room_number: str) -> Optional[Assignment]:
        room = self.rooms.get(room_number)
        if room is None or not room.room_id:
            return None
        for a in self.assignments:
            if a.room_id == room.room_id:
                return a
        return None

    def stats(self) -> Dict[str, Any]:
        return {
            'building': self.building,
            'loaded_at': self.loaded_at,
            'court_rooms': len(self.rooms),
            'part_mappings': len(self.part_to_room),
            'judge_mappings': len(self.judge_to_room),
            'personnel': len(self.personnel),
            'assignments': len(self.assignments),
        }


class RegistryStore:
    """Holds the process-wide RegistryCache with an explicit load/clear lifecycle.

    ``source`` is any object exposing ``fetch_rooms()``, ``fetch_personnel()``
    and ``fetch_assignments()``, each returning a list of row dicts.
    """

    def __init__(self, source: Any, max_workers: int = 3):
        self.source = source
        self.max_workers = max(1, max_workers)
        self._cache: Optional[RegistryCache] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[RegistryCache]:
        return self._cache

    def clear(self) -> None:
        self._cache = None
        logger.info("[registry] Enrichment cache cleared")

    def get_or_load(self, building: str = "") -> RegistryCache:
        cache = self._cache
        if cache is not None:
            return cache
        return self.load(building)

    def load(self, building: str = "") -> RegistryCache:
        logger.info(f"[registry] Loading enrichment data for building {building or 'all'}")
        with self._lock:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                rooms_f = executor.submit(self.source.fetch_rooms)
                personnel_f = executor.submit(self.source.fetch_personnel)
                assignments_f = executor.submit(self.source.fetch_assignments)

                try:
                    rooms = rooms_f.result()
                except Exception as e:
                    logger.error(f"[registry] Error loading court rooms: {e}")
                    raise RegistryUnavailable() from e
                personnel = self._soft_result('personnel', personnel_f.result)
                assignments = self._soft_result('assignments', assignments_f.result)

            cache = RegistryCache.build(rooms, personnel, assignments, building=building)
            self._cache = cache
        logger.info(f"[registry] Enrichment data loaded: {cache.stats()}")
        return cache

    @staticmethod
    def _soft_result(name: str, result: Callable[[], Any]) -> List[Any]:
        try:
            return list(result() or [])
        except Exception as e:
            logger.warning(f"[registry] Error loading {name}, continuing without: {e}")
            return []


__all__ = ['PART_PATTERN', 'RegistryCache', 'RegistryStore']
