"""Report header helpers.

Daily reports are titled like "11-21-25 AM PM REPORT 111 CENTRE STREET";
the AI boundary returns the building as "111 Centre Street". The three-digit
code is what scopes the registry.
"""
from __future__ import annotations
import re
from typing import Dict

HEADER_RE = re.compile(r'(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})\s*AM\s*PM\s*REPORT\s*(\d{3})\s*CENTRE', re.IGNORECASE)
BUILDING_CODE_RE = re.compile(r'\b(\d{3})\b')


def building_code(building: str) -> str:
    """Three-digit building code, e.g. 111 for "111 Centre Street", else empty."""
    m = BUILDING_CODE_RE.search(building or '')
    return m.group(1) if m else ''


def parse_report_header(text: str) -> Dict[str, str]:
    """Pull the ISO report date and building out of a report title line."""
    m = HEADER_RE.search(text or '')
    if not m:
        return {'report_date': '', 'building': ''}
    date_str, code = m.groups()
    month, day, year = re.split(r'[-/]', date_str)
    if len(year) == 2:
        year = f"20{year}"
    return {
        'report_date': f"{year}-{month.zfill(2)}-{day.zfill(2)}",
        'building': f"{code} Centre Street",
    }


if __name__ == '__main__':
    print(parse_report_header("11-21-25 AM PM REPORT 111 CENTRE STREET"))
