"""Decomposition of the report's composite "Part/Judge" cell.

The cell is multi-line text such as::

    TAP A / TAP G / GWP1
    Cal Wk 3
    OWN
    OUT
    10/23
    10/24

Line 1 is always the part identifier (possibly several slash-separated
aliases). The judge never appears in this cell; it comes from the registry.
Remaining lines are classified first-match-wins:
  - calendar week marker ("Cal Wk 3")
  - date or date range ("10/23", "10/21-10/25")
  - short all-letter status code ("OWN", "OUT")
Anything else is dropped.
"""
from __future__ import annotations
import re
from typing import List

from court_calendar.extraction.schemas import ExtractedSession

CAL_WEEK_RE = re.compile(r'Cal\s*Wk\s*(\d+)', re.IGNORECASE)
DATE_RE = re.compile(r'\d+[-/]\d+')
STATUS_RE = re.compile(r'^[A-Z\s]+$')
STATUS_MAX_LEN = 10


def split_lines(cell_text: str) -> List[str]:
    return [ln.strip() for ln in (cell_text or '').splitlines() if ln.strip()]


def parse_part_column(cell_text: str) -> ExtractedSession:
    lines = split_lines(cell_text)
    session = ExtractedSession()
    if not lines:
        return session
    session.part_number = lines[0]

    statuses: List[str] = []
    dates: List[str] = []
    for line in lines[1:]:
        m = CAL_WEEK_RE.search(line)
        if m:
            session.calendar_week = m.group(1)
            session.calendar_day = line
            continue
        if DATE_RE.search(line):
            dates.append(line)
            continue
        upper = line.upper()
        if len(upper) <= STATUS_MAX_LEN and STATUS_RE.match(upper):
            statuses.append(upper)

    if statuses:
        session.absence_status = " / ".join(statuses)
    if dates:
        session.absence_dates = dates
    return session


if __name__ == '__main__':
    sample = "TAP A / TAP G / GWP1\nOWN\nOUT\n10/23\n10/24"
    print(parse_part_column(sample).model_dump())
