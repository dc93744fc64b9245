"""Typed shapes produced by the extraction pipeline.

ExtractedEntry/ExtractedCase mirror the whole-report JSON returned by the AI
boundary after normalization. ExtractedSession is the per-part record that
the column decomposer and the resolver work on.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class ExtractedCase(BaseModel):
    sending_part: str = ""
    defendant: str = ""
    purpose: str = ""
    transfer_date: str = ""
    top_charge: str = ""
    status: str = ""
    calendar_date: str = ""
    case_count: int = 0
    attorney: str = ""
    estimated_final_date: str = ""
    is_juvenile: bool = False


class ExtractedEntry(BaseModel):
    part: str = ""
    judge: str = ""
    calendar_day: str = ""
    out_dates: List[str] = Field(default_factory=list)
    confidence: float = 0.85
    cases: List[ExtractedCase] = Field(default_factory=list)


class ExtractedSession(BaseModel):
    part_number: str = ""
    judge_name: str = ""
    calendar_week: Optional[str] = None
    calendar_day: Optional[str] = None
    absence_status: Optional[str] = None
    absence_dates: List[str] = Field(default_factory=list)
    room_number: Optional[str] = None
    clerk_name: Optional[str] = None
    cases: List[Any] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class ExtractionResult(BaseModel):
    report_date: Optional[str] = None
    building: Optional[str] = None
    report_type: Optional[str] = None
    entries: List[ExtractedEntry] = Field(default_factory=list)
    sessions: Optional[List[ExtractedSession]] = None

    @property
    def total_cases(self) -> int:
        return sum(len(e.cases) for e in self.entries)


__all__ = ['ExtractedCase', 'ExtractedEntry', 'ExtractedSession', 'ExtractionResult']
