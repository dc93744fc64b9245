"""End-to-end extraction of a daily court report.

Per request:
  Received -> Authenticated -> Validated -> AIRequested -> AIResponded
  -> Normalized -> (Enriched) -> Logged -> Returned
Any step may fail with one of the ``court_calendar.errors`` kinds. The audit
write is the only step whose failure is swallowed.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from court_calendar.errors import (
    BadRequest, MalformedResponse, NoDataExtracted, NotFound, ServiceUnavailable, Unauthorized,
)
from court_calendar.extraction.normalize import normalize_report
from court_calendar.extraction.schemas import ExtractedEntry, ExtractedSession, ExtractionResult
from court_calendar.parsing.part_column import parse_part_column
from court_calendar.parsing.report_header import building_code, parse_report_header
from court_calendar.registry.cache import RegistryStore
from court_calendar.resolution.matcher import NameMatcher
from court_calendar.resolution.resolver import enrich_sessions

logger = logging.getLogger(__name__)


def session_from_entry(entry: ExtractedEntry) -> ExtractedSession:
    """Turn a report entry into a session, decomposing a multi-line part cell."""
    cell = parse_part_column(entry.part)
    dates: List[str] = list(dict.fromkeys([*entry.out_dates, *cell.absence_dates]))
    return ExtractedSession(
        part_number=cell.part_number,
        judge_name=entry.judge,
        calendar_week=cell.calendar_week,
        calendar_day=entry.calendar_day or cell.calendar_day,
        absence_status=cell.absence_status,
        absence_dates=dates,
        cases=[c.model_dump() for c in entry.cases],
        confidence=entry.confidence,
    )


class ExtractionOrchestrator:
    def __init__(
        self,
        document_store: Any,
        ai_client: Any,
        audit_sink: Any = None,
        registry: Optional[RegistryStore] = None,
        matcher: Optional[NameMatcher] = None,
        default_building: str = "",
    ):
        self.document_store = document_store
        self.ai_client = ai_client
        self.audit_sink = audit_sink
        self.registry = registry
        self.matcher = matcher
        self.default_building = default_building

    def extract(self, principal: Optional[str], file_path: Any, enrich: bool = False,
                building: Optional[str] = None) -> ExtractionResult:
        if not principal:
            raise Unauthorized()
        if not isinstance(file_path, str) or not file_path.strip():
            raise BadRequest()
        file_path = file_path.strip()
        if not getattr(self.ai_client, 'configured', False):
            raise ServiceUnavailable()

        document = self._download(file_path)
        content = self.ai_client.complete(document)
        data = self._parse(content)

        entries = data.get('entries')
        if not isinstance(entries, list) or not entries:
            raise NoDataExtracted()

        result = normalize_report(data)
        self._backfill_header(result, file_path)
        logger.info(f"Extracted {len(result.entries)} parts from {result.building or 'unknown building'} "
                    f"report dated {result.report_date or 'unknown'} by user {principal}")

        if enrich:
            result.sessions = self.enrich(
                [session_from_entry(e) for e in result.entries],
                building or building_code(result.building or '') or self.default_building,
            )

        self._audit(file_path, result, len(content))
        return result

    def enrich(self, sessions: List[ExtractedSession], building: str = "") -> List[ExtractedSession]:
        if self.registry is None:
            logger.warning("No registry configured; returning sessions unenriched")
            return sessions
        cache = self.registry.get_or_load(building or self.default_building)
        return enrich_sessions(sessions, cache, self.matcher)

    def _download(self, file_path: str) -> bytes:
        try:
            document = self.document_store.download(file_path)
        except Exception as e:
            logger.warning(f"Failed to download {file_path}: {e}")
            raise NotFound(f"Failed to download file: {e}") from e
        if not document:
            raise NotFound()
        return document

    @staticmethod
    def _parse(content: str) -> Dict[str, Any]:
        try:
            data = json.loads(content)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to parse AI response as JSON: {str(content)[:500]}")
            raise MalformedResponse() from e
        if not isinstance(data, dict):
            raise MalformedResponse()
        return data

    @staticmethod
    def _backfill_header(result: ExtractionResult, file_path: str) -> None:
        if result.report_date and result.building:
            return
        header = parse_report_header(os.path.basename(file_path))
        result.report_date = result.report_date or header['report_date'] or None
        result.building = result.building or header['building'] or None

    def _audit(self, file_path: str, result: ExtractionResult, response_length: int) -> None:
        if self.audit_sink is None:
            return
        record = {
            'file_path': file_path,
            'report_date': result.report_date,
            'building': result.building,
            'parts_extracted': len(result.entries),
            'total_cases': result.total_cases,
            'raw_response_length': response_length,
            'created_at': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        try:
            self.audit_sink.write(record)
        except Exception as e:
            logger.warning(f"Failed to log extraction metadata: {e}")


__all__ = ['ExtractionOrchestrator', 'session_from_entry']
