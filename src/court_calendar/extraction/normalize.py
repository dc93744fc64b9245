"""One-pass normalization of the raw AI extraction payload.

Whatever the AI boundary returns, the output of ``normalize_report`` holds
only trimmed strings, real numbers, real booleans and non-null lists.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional

from court_calendar.extraction.schemas import ExtractedCase, ExtractedEntry, ExtractionResult

DEFAULT_ENTRY_CONFIDENCE = 0.85

OUT_DATE_SPLIT = re.compile(r'[;,]\s*')
TRUE_STRINGS = {'true', 'yes', 'y', '1', 't'}


def text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    return text(value) or None


def number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return default
        return parsed if math.isfinite(parsed) else default
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if math.isfinite(parsed) else default
    return default


def flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items: List[Any] = OUT_DATE_SPLIT.split(value)
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []
    return [t for t in (text(v) for v in items) if t]


def normalize_case(raw: Any) -> ExtractedCase:
    c: Dict[str, Any] = raw if isinstance(raw, dict) else {}
    return ExtractedCase(
        sending_part=text(c.get('sending_part')),
        defendant=text(c.get('defendant')),
        purpose=text(c.get('purpose')),
        transfer_date=text(c.get('transfer_date')),
        top_charge=text(c.get('top_charge')),
        status=text(c.get('status')),
        calendar_date=text(c.get('calendar_date')),
        case_count=int(number(c.get('case_count'), 0)),
        attorney=text(c.get('attorney')),
        estimated_final_date=text(c.get('estimated_final_date')),
        is_juvenile=flag(c.get('is_juvenile')),
    )


def normalize_entry(raw: Any) -> ExtractedEntry:
    e: Dict[str, Any] = raw if isinstance(raw, dict) else {}
    confidence = number(e.get('confidence'), DEFAULT_ENTRY_CONFIDENCE)
    cases = e.get('cases')
    return ExtractedEntry(
        part=text(e.get('part')),
        judge=text(e.get('judge')),
        calendar_day=text(e.get('calendar_day')),
        out_dates=string_list(e.get('out_dates')),
        confidence=min(max(confidence, 0.0), 1.0),
        cases=[normalize_case(c) for c in cases] if isinstance(cases, list) else [],
    )


def normalize_report(data: Dict[str, Any]) -> ExtractionResult:
    entries = data.get('entries')
    return ExtractionResult(
        report_date=optional_text(data.get('report_date')),
        building=optional_text(data.get('building')),
        report_type=optional_text(data.get('report_type')),
        entries=[normalize_entry(e) for e in entries] if isinstance(entries, list) else [],
    )


__all__ = [
    'DEFAULT_ENTRY_CONFIDENCE', 'text', 'optional_text', 'number', 'flag', 'string_list',
    'normalize_case', 'normalize_entry', 'normalize_report',
]
